from helpers import scan
from treelox.tokens import Token, TokenType as TT


def types(source: str) -> list[TT]:
    tokens, _, _ = scan(source)
    return [token.type for token in tokens]


def test_declarations():
    tokens, diagnostics, _ = scan('var foo = "string";\nvar bar = foo == 99;')

    assert [token.type for token in tokens] == [
        TT.VAR, TT.IDENTIFIER, TT.EQUAL, TT.STRING, TT.SEMICOLON,
        TT.VAR, TT.IDENTIFIER, TT.EQUAL, TT.IDENTIFIER, TT.EQUAL_EQUAL, TT.NUMBER, TT.SEMICOLON,
        TT.EOF,
    ]
    assert tokens[3].literal == "string"
    assert tokens[3].lexeme == '"string"'
    assert tokens[10].literal == 99.0
    assert tokens[0].line == 1
    assert tokens[11].line == 2
    assert not diagnostics.had_error


def test_two_character_operators_are_greedy():
    assert types("! != = == < <= > >=") == [
        TT.BANG, TT.BANG_EQUAL, TT.EQUAL, TT.EQUAL_EQUAL,
        TT.LESS, TT.LESS_EQUAL, TT.GREATER, TT.GREATER_EQUAL, TT.EOF,
    ]


def test_line_comment_runs_to_newline():
    tokens, _, _ = scan("1 // ignored ( ) {\n2")

    assert [token.type for token in tokens] == [TT.NUMBER, TT.NUMBER, TT.EOF]
    assert tokens[1].line == 2


def test_slash_alone_is_an_operator():
    assert types("4 / 2") == [TT.NUMBER, TT.SLASH, TT.NUMBER, TT.EOF]


def test_keywords_and_identifiers():
    assert types("and class else false fun for if nil or print return super this true var while") == [
        TT.AND, TT.CLASS, TT.ELSE, TT.FALSE, TT.FUN, TT.FOR, TT.IF, TT.NIL,
        TT.OR, TT.PRINT, TT.RETURN, TT.SUPER, TT.THIS, TT.TRUE, TT.VAR, TT.WHILE, TT.EOF,
    ]
    tokens, _, _ = scan("_under score2 classy")
    assert [(t.type, t.lexeme) for t in tokens[:-1]] == [
        (TT.IDENTIFIER, "_under"), (TT.IDENTIFIER, "score2"), (TT.IDENTIFIER, "classy"),
    ]


def test_numbers():
    tokens, _, _ = scan("12 3.5 7.")

    assert [token.literal for token in tokens[:3]] == [12.0, 3.5, 7.0]
    # The trailing dot is not part of the number
    assert tokens[3].type == TT.DOT
    assert tokens[4].type == TT.EOF


def test_multiline_string_counts_lines():
    tokens, _, _ = scan('"one\ntwo"\nx')

    assert tokens[0].literal == "one\ntwo"
    assert tokens[0].line == 2
    assert tokens[1] == Token(TT.IDENTIFIER, "x", 3)


def test_unterminated_string_is_reported():
    tokens, diagnostics, err = scan('print "oops')

    assert diagnostics.had_error
    assert err.getvalue() == "[line 1] Error: Unterminated string.\n"
    assert [token.type for token in tokens] == [TT.PRINT, TT.EOF]


def test_unexpected_characters_do_not_stop_scanning():
    tokens, diagnostics, err = scan("a @ b\n# c")

    assert diagnostics.had_error
    assert err.getvalue().splitlines() == [
        "[line 1] Error: Unexpected character.",
        "[line 2] Error: Unexpected character.",
    ]
    assert [token.lexeme for token in tokens if token.type == TT.IDENTIFIER] == ["a", "b", "c"]


def test_empty_source_yields_only_eof():
    tokens, _, _ = scan("")

    assert tokens == [Token(TT.EOF, "", 1)]
