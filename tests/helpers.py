import io

from treelox.diagnostics import Diagnostics
from treelox.parser import Parser
from treelox.scanner import Scanner
from treelox.stmt import Stmt
from treelox.tokens import Token


def scan(source: str) -> tuple[list[Token], Diagnostics, io.StringIO]:
    err = io.StringIO()
    diagnostics = Diagnostics(err)
    return Scanner(source, diagnostics).scan_tokens(), diagnostics, err


def parse(source: str) -> tuple[list[Stmt], Diagnostics, io.StringIO]:
    tokens, diagnostics, err = scan(source)
    return Parser(tokens, diagnostics).parse(), diagnostics, err
