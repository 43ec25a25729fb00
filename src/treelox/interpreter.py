import math
import sys
from functools import singledispatchmethod
from typing import Any, TextIO, override

from treelox.diagnostics import Diagnostics, LoxRuntimeError
from treelox.environment import Environment
import treelox.expr as ex
from treelox import function as fn
from treelox import loxclass as cl
from treelox import stmt as st
from treelox.function import COMPLETED, Outcome, Returning
from treelox.tokens import Token, TokenType as TT, TokenGroup as TG
from treelox.visitor import Visitor, Visitable


class Interpreter(Visitor[Any]):
    globals: Environment
    environment: Environment
    locals: dict[ex.Expr, int]

    def __init__(self, diagnostics: Diagnostics, out: TextIO | None = None) -> None:
        self.diagnostics = diagnostics
        self.out = out
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.register_native(fn.clock)

    def register_native(self, function: fn.NativeFunction) -> None:
        self.globals.define(function.name, function)

    def interpret(self, statements: list[st.Stmt]) -> None:
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.diagnostics.runtime_error(error)

    def resolve(self, expr: ex.Expr, depth: int) -> None:
        self.locals[expr] = depth

    @singledispatchmethod
    @override
    def visit(self, obj: Visitable) -> Any:
        raise NotImplementedError(f"'{obj.__class__.__name__}' could not be dispatched by visit()")

    @visit.register
    def _(self, expr: ex.Literal) -> Any:
        return expr.value

    @visit.register
    def _(self, expr: ex.Unary) -> Any:
        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TT.BANG:
                return not self.is_truthy(right)
            case TT.MINUS:
                self.check_number_operands(expr.operator, right)
                return -right

            case _:
                return None

    @visit.register
    def _(self, expr: ex.Binary) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)

        operator = expr.operator
        if operator.type == TT.PLUS:
            return self.add(operator, left, right)
        elif operator.type in TG.Factor | {TT.MINUS}:
            return self.arithmetic(operator, left, right)
        elif operator.type in TG.Comparison:
            return self.compare(operator, left, right)

        match operator.type:
            case TT.BANG_EQUAL:
                return not self.is_equal(left, right)
            case TT.EQUAL_EQUAL:
                return self.is_equal(left, right)
            case _:
                return None

    @visit.register
    def _(self, expr: ex.Grouping) -> Any:
        return self.evaluate(expr.expression)

    @visit.register
    def _(self, expr: ex.Variable) -> Any:
        return self.lookup_variable(expr.name, expr)

    @visit.register
    def _(self, expr: ex.Assign) -> Any:
        value = self.evaluate(expr.value)

        distance = self.locals.get(expr)
        if distance is not None:
            self.environment.assign_at(distance, expr.name, value)
        else:
            self.globals.assign(expr.name, value)

        return value

    @visit.register
    def _(self, expr: ex.Logical) -> Any:
        left = self.evaluate(expr.left)

        if expr.operator.type == TT.OR:
            if self.is_truthy(left):
                return left
        else:
            if not self.is_truthy(left):
                return left

        return self.evaluate(expr.right)

    @visit.register
    def _(self, expr: ex.Call) -> Any:
        callee = self.evaluate(expr.callee)

        arguments = []
        for argument in expr.arguments:
            arguments.append(self.evaluate(argument))

        if not isinstance(callee, fn.LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")

        function = callee

        if len(arguments) != function.arity():
            raise LoxRuntimeError(expr.paren,
            f"Expected {function.arity()} arguments but got {len(arguments)}.")

        return function.call(self, arguments)

    @visit.register
    def _(self, expr: ex.Get) -> Any:
        obj = self.evaluate(expr.object)
        if isinstance(obj, cl.LoxInstance):
            return obj.get(expr.name)

        raise LoxRuntimeError(expr.name, "Only instances have properties.")

    @visit.register
    def _(self, expr: ex.Set) -> Any:
        obj = self.evaluate(expr.object)
        if not isinstance(obj, cl.LoxInstance):
            raise LoxRuntimeError(expr.name, "Only instances have fields.")

        value = self.evaluate(expr.value)
        obj.set(expr.name, value)
        return value

    @visit.register
    def _(self, expr: ex.This) -> Any:
        return self.lookup_variable(expr.keyword, expr)

    @visit.register
    def _(self, expr: ex.Super) -> Any:
        distance = self.locals[expr]
        superclass: cl.LoxClass = self.environment.get_at(distance, "super")
        # 'this' lives in the scope just inside the one holding 'super'
        obj = self.environment.get_at(distance - 1, "this")

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise LoxRuntimeError(expr.method, f"Undefined property '{expr.method.lexeme}'.")

        return method.bind(obj)

    @visit.register
    def _(self, stmt: st.Expression) -> Outcome:
        self.evaluate(stmt.expression)
        return COMPLETED

    @visit.register
    def _(self, stmt: st.Function) -> Outcome:
        function = fn.LoxFunction(stmt, self.environment)
        self.environment.define(stmt.name.lexeme, function)
        return COMPLETED

    @visit.register
    def _(self, stmt: st.Class) -> Outcome:
        self.environment.define(stmt.name.lexeme, None)

        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, cl.LoxClass):
                raise LoxRuntimeError(stmt.superclass.name, "Superclass must be a class.")

        method_scope = self.environment
        if superclass is not None:
            method_scope = Environment(self.environment)
            method_scope.define("super", superclass)

        methods = {
            method.name.lexeme: fn.LoxFunction(method, method_scope, method.name.lexeme == "init")
            for method in stmt.methods
        }

        klass = cl.LoxClass(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)
        return COMPLETED

    @visit.register
    def _(self, stmt: st.If) -> Outcome:
        if self.is_truthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            return self.execute(stmt.else_branch)

        return COMPLETED

    @visit.register
    def _(self, stmt: st.Print) -> Outcome:
        value = self.evaluate(stmt.expression)
        print(self.stringify(value), file=self.out if self.out is not None else sys.stdout)
        return COMPLETED

    @visit.register
    def _(self, stmt: st.Return) -> Outcome:
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)

        return Returning(value)

    @visit.register
    def _(self, stmt: st.Var) -> Outcome:
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)
        return COMPLETED

    @visit.register
    def _(self, stmt: st.While) -> Outcome:
        while self.is_truthy(self.evaluate(stmt.condition)):
            outcome = self.execute(stmt.body)
            if isinstance(outcome, Returning):
                return outcome

        return COMPLETED

    @visit.register
    def _(self, stmt: st.Block) -> Outcome:
        return self.execute_block(stmt.statements, Environment(self.environment))

    def evaluate(self, expr: ex.Expr) -> Any:
        return expr.accept(self)

    def execute(self, stmt: st.Stmt) -> Outcome:
        return stmt.accept(self)

    def execute_block(self, statements: list[st.Stmt], environment: Environment) -> Outcome:
        previous = self.environment

        try:
            self.environment = environment

            for statement in statements:
                outcome = self.execute(statement)
                if isinstance(outcome, Returning):
                    return outcome
        finally:
            self.environment = previous

        return COMPLETED

    def lookup_variable(self, name: Token, expr: ex.Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)

        return self.globals.get(name)

    @staticmethod
    def is_truthy(obj: Any) -> bool:
        match obj:
            case None:
                return False
            case bool(b):
                return b
            case _:
                return True

    @staticmethod
    def is_equal(left: Any, right: Any) -> bool:
        match left, right:
            case None, _:
                # nil is not equal to anything, itself included
                return False
            case bool(), bool():
                return left == right
            case float(), float():
                return left == right
            case str(), str():
                return left == right
            case _:
                return left is right

    @staticmethod
    def is_number(num: Any) -> bool:
        return isinstance(num, float)

    def check_number_operands(self, operator: Token, *operands: Any) -> None:
        if not all(map(self.is_number, operands)):
            if len(operands) > 1:
                raise LoxRuntimeError(operator, "Operands must be numbers.")

            raise LoxRuntimeError(operator, "Operand must be a number.")

    def add(self, operator: Token, left: Any, right: Any) -> Any:
        match left, right:
            case float(), float():
                return left + right
            case str(), str():
                return left + right
            case _:
                raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

    def arithmetic(self, operator: Token, left: Any, right: Any) -> float:
        self.check_number_operands(operator, left, right)

        match operator.type:
            case TT.MINUS:
                return left - right
            case TT.STAR:
                return left * right
            case TT.SLASH:
                return self.divide(left, right)
            case _:
                raise ValueError(f"Not an arithmetic operator: {operator.lexeme}")

    @staticmethod
    def divide(left: float, right: float) -> float:
        if right != 0:
            return left / right

        # IEEE 754 semantics; Python raises on float division by zero
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)

    def compare(self, operator: Token, left: Any, right: Any) -> bool:
        self.check_number_operands(operator, left, right)

        match operator.type:
            case TT.GREATER:
                return left > right
            case TT.GREATER_EQUAL:
                return left >= right
            case TT.LESS:
                return left < right
            case TT.LESS_EQUAL:
                return left <= right
            case _:
                raise ValueError(f"Not a comparison operator: {operator.lexeme}")

    def stringify(self, obj: Any) -> str:
        match obj:
            case None:
                return "nil"
            case bool(b):
                return str(b).lower()
            case float(num) if math.isnan(num):
                return "NaN"
            case float(num) if math.isinf(num):
                return "Infinity" if num > 0 else "-Infinity"
            case float(num) if num.is_integer():
                return f"{num:.0f}"
            case _:
                return str(obj)
