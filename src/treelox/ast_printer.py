from functools import singledispatchmethod
from typing import override

import treelox.expr as ex
from treelox.visitor import Visitor, Visitable

class AstPrinter(Visitor[str]):
    """Debug rendering of expressions as parenthesized prefix notation."""

    def print(self, expr: ex.Expr) -> str:
        return expr.accept(self)

    @singledispatchmethod
    @override
    def visit(self, obj: Visitable) -> str:
        raise NotImplementedError(f"'{obj.__class__.__name__}' could not be dispatched by visit()")

    @visit.register
    def _(self, expr: ex.Binary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    @visit.register
    def _(self, expr: ex.Logical) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    @visit.register
    def _(self, expr: ex.Grouping) -> str:
        return self.parenthesize("group", expr.expression)

    @visit.register
    def _(self, expr: ex.Literal) -> str:
        if expr.value is None:
            return "nil"
        elif isinstance(expr.value, bool):
            return str(expr.value).lower()
        elif isinstance(expr.value, str):
            return f'"{expr.value}"'
        return str(expr.value)

    @visit.register
    def _(self, expr: ex.Unary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.right)

    @visit.register
    def _(self, expr: ex.Variable) -> str:
        return expr.name.lexeme

    @visit.register
    def _(self, expr: ex.Assign) -> str:
        return self.parenthesize(f"= {expr.name.lexeme}", expr.value)

    @visit.register
    def _(self, expr: ex.Call) -> str:
        return self.parenthesize("call", expr.callee, *expr.arguments)

    @visit.register
    def _(self, expr: ex.Get) -> str:
        return self.parenthesize(f". {expr.name.lexeme}", expr.object)

    @visit.register
    def _(self, expr: ex.Set) -> str:
        return self.parenthesize(f"= . {expr.name.lexeme}", expr.object, expr.value)

    @visit.register
    def _(self, expr: ex.This) -> str:
        return "this"

    @visit.register
    def _(self, expr: ex.Super) -> str:
        return f"(super {expr.method.lexeme})"

    def parenthesize(self, name: str, *exprs: ex.Expr) -> str:
        if not exprs:
            return f"({name})"

        content = " ".join([expr.accept(self) for expr in exprs])

        return f"({name} {content})"
