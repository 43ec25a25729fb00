import sys
from typing import Final, TextIO

from treelox.tokens import Token, TokenType as TT


class LoxRuntimeError(Exception):
    token: Final[Token | None]

    def __init__(self, token: Token | None, message: str) -> None:
        super().__init__(message)
        self.token = token


class Diagnostics:
    """Error reporting for one interpreter session.

    Every stage reports through the same instance, so the caller can
    inspect ``had_error`` (lexical, parse or resolution error) and
    ``had_runtime_error`` after a run.
    """
    had_error: bool
    had_runtime_error: bool

    def __init__(self, err: TextIO | None = None) -> None:
        self.err = err
        self.had_error = False
        self.had_runtime_error = False

    def reset(self) -> None:
        self.had_error = False
        self.had_runtime_error = False

    def error(self, where: int | Token, message: str) -> None:
        if isinstance(where, int):
            self.report(where, "", message)
        else:
            if where.type == TT.EOF:
                self.report(where.line, " at end", message)
            else:
                self.report(where.line, f" at '{where.lexeme}'", message)

    def runtime_error(self, error: LoxRuntimeError) -> None:
        if error.token is not None:
            print(f"{error}\n[line {error.token.line}]", file=self._stream())
        else:
            print(str(error), file=self._stream())
        self.had_runtime_error = True

    def report(self, line: int, where: str, message: str) -> None:
        print(f"[line {line}] Error{where}: {message}", file=self._stream())
        self.had_error = True

    def _stream(self) -> TextIO:
        return self.err if self.err is not None else sys.stderr
