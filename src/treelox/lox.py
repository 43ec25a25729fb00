import os
from typing import TextIO

from treelox.diagnostics import Diagnostics
from treelox.interpreter import Interpreter
from treelox.parser import Parser
from treelox.resolver import Resolver
from treelox.scanner import Scanner

class Lox:
    """An interpreter session.

    Global definitions persist from one ``run`` to the next, which is what
    the interactive prompt relies on.
    """

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.diagnostics = Diagnostics(err)
        self.interpreter = Interpreter(self.diagnostics, out)

    @property
    def had_error(self) -> bool:
        return self.diagnostics.had_error

    @property
    def had_runtime_error(self) -> bool:
        return self.diagnostics.had_runtime_error

    def run_file(self, path: str | os.PathLike) -> None:
        with open(path, "r") as file:
            prog = file.read()
            self.run(prog)

    def run_prompt(self) -> None:
        try:
            while True:
                line = input("> ")
                self.run(line)
                self.diagnostics.reset()
        except EOFError:
            print()

    def run(self, source: str) -> None:
        scanner = Scanner(source, self.diagnostics)
        tokens = scanner.scan_tokens()

        parser = Parser(tokens, self.diagnostics)
        statements = parser.parse()

        if self.had_error:
            return

        resolver = Resolver(self.interpreter, self.diagnostics)
        resolver.resolve(statements)

        # Nothing runs if any static error was found
        if self.had_error:
            return

        self.interpreter.interpret(statements)
