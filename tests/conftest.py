import io
from dataclasses import dataclass
from textwrap import dedent
from typing import Callable

import pytest

from treelox.lox import Lox


@dataclass
class RunResult:
    lox: Lox
    stdout: str
    stderr: str

    @property
    def lines(self) -> list[str]:
        return self.stdout.splitlines()

    @property
    def had_error(self) -> bool:
        return self.lox.had_error

    @property
    def had_runtime_error(self) -> bool:
        return self.lox.had_runtime_error


@pytest.fixture
def run() -> Callable[[str], RunResult]:
    """Run a program in a fresh session and capture both streams."""

    def _run(source: str) -> RunResult:
        out, err = io.StringIO(), io.StringIO()
        lox = Lox(out=out, err=err)
        lox.run(dedent(source))
        return RunResult(lox, out.getvalue(), err.getvalue())

    return _run


