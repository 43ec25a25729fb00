import treelox.expr as ex
from treelox import stmt as st
from treelox.ast_printer import AstPrinter

from helpers import parse


def parse_expression(source: str) -> ex.Expr:
    statements, diagnostics, err = parse(f"{source};")
    assert not diagnostics.had_error, err.getvalue()
    assert len(statements) == 1
    assert isinstance(statements[0], st.Expression)
    return statements[0].expression


def render(source: str) -> str:
    return AstPrinter().print(parse_expression(source))


def test_precedence():
    assert render("1 + 2 * 3") == "(+ 1.0 (* 2.0 3.0))"
    assert render("(1 + 2) * 3") == "(* (group (+ 1.0 2.0)) 3.0)"
    assert render("-a.b") == "(- (. b a))"
    assert render("!a == b < c") == "(== (! a) (< b c))"
    assert render("a or b and c") == "(or a (and b c))"


def test_binary_operators_are_left_associative():
    assert render("1 - 2 - 3") == "(- (- 1.0 2.0) 3.0)"
    assert render("8 / 4 / 2") == "(/ (/ 8.0 4.0) 2.0)"


def test_assignment_is_right_associative():
    expr = parse_expression("a = b = 1")

    assert isinstance(expr, ex.Assign)
    assert expr.name.lexeme == "a"
    assert isinstance(expr.value, ex.Assign)
    assert expr.value.name.lexeme == "b"


def test_property_assignment_becomes_set():
    expr = parse_expression("a.b.c = 3")

    assert isinstance(expr, ex.Set)
    assert expr.name.lexeme == "c"
    assert isinstance(expr.object, ex.Get)


def test_calls_chain():
    assert render("f(1)(2).g(x, y)") == "(call (. g (call (call f 1.0) 2.0)) x y)"


def test_super_and_this():
    assert render("super.method") == "(super method)"
    assert render("this.x") == "(. x this)"


def test_invalid_assignment_target_is_reported_without_recovery():
    statements, diagnostics, err = parse("1 + 2 = 3; print 4;")

    assert diagnostics.had_error
    assert err.getvalue() == "[line 1] Error at '=': Invalid assignment target.\n"
    # The parser is not confused, so both statements are still produced
    assert len(statements) == 2


def test_for_is_desugared_to_while():
    statements, diagnostics, _ = parse("for (var i = 0; i < 3; i = i + 1) print i;")

    assert not diagnostics.had_error
    [outer] = statements
    assert isinstance(outer, st.Block)
    initializer, loop = outer.statements
    assert isinstance(initializer, st.Var)
    assert isinstance(loop, st.While)
    assert isinstance(loop.body, st.Block)
    body, increment = loop.body.statements
    assert isinstance(body, st.Print)
    assert isinstance(increment, st.Expression)
    assert isinstance(increment.expression, ex.Assign)


def test_for_without_clauses_loops_on_true():
    statements, _, _ = parse("for (;;) print 1;")

    [loop] = statements
    assert isinstance(loop, st.While)
    assert isinstance(loop.condition, ex.Literal)
    assert loop.condition.value is True
    assert isinstance(loop.body, st.Print)


def test_class_declaration():
    statements, diagnostics, _ = parse("class B < A { init(x) { this.x = x; } get() { return this.x; } }")

    assert not diagnostics.had_error
    [klass] = statements
    assert isinstance(klass, st.Class)
    assert klass.name.lexeme == "B"
    assert isinstance(klass.superclass, ex.Variable)
    assert klass.superclass.name.lexeme == "A"
    assert [method.name.lexeme for method in klass.methods] == ["init", "get"]
    assert [param.lexeme for param in klass.methods[0].params] == ["x"]


def test_function_declaration():
    statements, _, _ = parse("fun add(a, b) { return a + b; }")

    [function] = statements
    assert isinstance(function, st.Function)
    assert [param.lexeme for param in function.params] == ["a", "b"]
    [ret] = function.body
    assert isinstance(ret, st.Return)
    assert isinstance(ret.value, ex.Binary)


def test_if_else_binds_to_nearest_if():
    statements, _, _ = parse("if (a) if (b) print 1; else print 2;")

    [outer] = statements
    assert isinstance(outer, st.If)
    assert outer.else_branch is None
    assert isinstance(outer.then_branch, st.If)
    assert outer.then_branch.else_branch is not None


def test_synchronize_reports_several_errors():
    statements, diagnostics, err = parse("var = 1;\nprint 2;\nvar x = ;\nprint 3;")

    assert diagnostics.had_error
    assert err.getvalue().splitlines() == [
        "[line 1] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect expression.",
    ]
    assert [type(statement) for statement in statements] == [st.Print, st.Print]


def test_error_at_end():
    _, diagnostics, err = parse("print 1")

    assert diagnostics.had_error
    assert err.getvalue() == "[line 1] Error at end: Expect ';' after value.\n"


def test_too_many_arguments():
    args = ", ".join(["1"] * 256)
    statements, diagnostics, err = parse(f"f({args});")

    assert diagnostics.had_error
    assert "Can't have more than 255 arguments." in err.getvalue()
    # Reported, but the call is still parsed
    assert len(statements) == 1


def test_too_many_parameters():
    params = ", ".join(f"p{i}" for i in range(256))
    _, diagnostics, err = parse(f"fun f({params}) {{}}")

    assert diagnostics.had_error
    assert "Can't have more than 255 parameters." in err.getvalue()
