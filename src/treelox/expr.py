from dataclasses import dataclass
from typing import Any

from treelox.tokens import Token
from treelox.visitor import Visitable


# Nodes compare and hash by identity: the resolver keys its
# distances on the exact node it visited.
@dataclass(frozen=True, eq=False)
class Expr(Visitable):
    ...

@dataclass(frozen=True, eq=False)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass(frozen=True, eq=False)
class Grouping(Expr):
    expression: Expr

@dataclass(frozen=True, eq=False)
class Literal(Expr):
    value: Any

@dataclass(frozen=True, eq=False)
class Unary(Expr):
    operator: Token
    right: Expr

@dataclass(frozen=True, eq=False)
class Variable(Expr):
    name: Token

@dataclass(frozen=True, eq=False)
class Assign(Expr):
    name: Token
    value: Expr

@dataclass(frozen=True, eq=False)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass(frozen=True, eq=False)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: list[Expr]

@dataclass(frozen=True, eq=False)
class Get(Expr):
    object: Expr
    name: Token

@dataclass(frozen=True, eq=False)
class Set(Expr):
    object: Expr
    name: Token
    value: Expr

@dataclass(frozen=True, eq=False)
class This(Expr):
    keyword: Token

@dataclass(frozen=True, eq=False)
class Super(Expr):
    keyword: Token
    method: Token
