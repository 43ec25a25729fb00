import pytest

from treelox.__main__ import main


def run_main(monkeypatch, *args: str) -> int:
    monkeypatch.setattr("sys.argv", ["treelox", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def test_too_many_arguments(monkeypatch, capsys):
    assert run_main(monkeypatch, "a.lox", "b.lox") == 64
    assert "Usage:" in capsys.readouterr().out


def test_static_error_exit_code(monkeypatch, capsys, tmp_path):
    script = tmp_path / "bad.lox"
    script.write_text('print "never";\nprint ;\n')

    assert run_main(monkeypatch, str(script)) == 65
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[line 2] Error at ';': Expect expression.\n"


def test_runtime_error_exit_code(monkeypatch, capsys, tmp_path):
    script = tmp_path / "boom.lox"
    script.write_text('print "first";\nprint -"x";\n')

    assert run_main(monkeypatch, str(script)) == 75
    captured = capsys.readouterr()
    assert captured.out == "first\n"
    assert captured.err == "Operand must be a number.\n[line 2]\n"


def test_successful_script(monkeypatch, capsys, tmp_path):
    script = tmp_path / "ok.lox"
    script.write_text("print 1 + 2;\n")
    monkeypatch.setattr("sys.argv", ["treelox", str(script)])

    main()

    assert capsys.readouterr().out == "3\n"


def test_prompt_resets_flags_between_lines(monkeypatch, capsys):
    lines = iter(["var a = 1;", "print a +;", "print a;", "print nil + 1;", "print a + 1;"])

    def fake_input(prompt: str) -> str:
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    monkeypatch.setattr("sys.argv", ["treelox"])

    main()

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["1", "2", ""]
    assert captured.err.splitlines() == [
        "[line 1] Error at ';': Expect expression.",
        "Operands must be two numbers or two strings.",
        "[line 1]",
    ]
