from abc import ABC, abstractmethod

class Visitor[T](ABC):
    @abstractmethod
    def visit(self, visited: 'Visitable') -> T:
        ...

class Visitable:
    def accept[T](self, visitor: Visitor[T]) -> T:
        return visitor.visit(self)
