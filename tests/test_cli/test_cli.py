"""Tests for the exprlang command-line entry point."""

from exprlang.cli import main


def write(tmp_path, source: str) -> str:
    path = tmp_path / "calc.txt"
    path.write_text(source, encoding="utf-8")
    return str(path)


class TestCli:
    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 1
        assert "Usage:" in capsys.readouterr().out

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert capsys.readouterr().out.startswith("exprlang ")

    def test_missing_file(self, capsys, tmp_path):
        assert main(["eval", str(tmp_path / "nope.txt")]) == 1
        assert "file not found" in capsys.readouterr().out

    def test_unknown_command(self, capsys, tmp_path):
        assert main(["frobnicate", write(tmp_path, "1")]) == 1

    def test_eval(self, capsys, tmp_path):
        path = write(tmp_path, '3 + 4 * 2; "ab" + "cd"; 1 / 4')
        assert main(["eval", path]) == 0
        assert capsys.readouterr().out.splitlines() == ["11", '"abcd"', "0.25"]

    def test_eval_with_variables(self, capsys, tmp_path):
        path = write(tmp_path, 'n * 2; name + "!"')
        assert main(["eval", path, "--set", "n=21", "--set", "name=bob"]) == 0
        assert capsys.readouterr().out.splitlines() == ["42", '"bob!"']

    def test_eval_bad_set(self, capsys, tmp_path):
        assert main(["eval", write(tmp_path, "1"), "--set", "novalue"]) == 1

    def test_eval_error(self, capsys, tmp_path):
        assert main(["eval", write(tmp_path, "1 + y")]) == 1
        assert "Undefined variable 'y'" in capsys.readouterr().out

    def test_eval_collect(self, capsys, tmp_path):
        path = write(tmp_path, '"a" + 1; 2 + 2')
        assert main(["eval", path, "--collect"]) == 1
        out = capsys.readouterr().out
        assert "4" in out.splitlines()
        assert "ERROR TYPE_MISMATCH" in out
        assert "FAIL (1 error(s))" in out

    def test_eval_clear_on_group(self, capsys, tmp_path):
        path = write(tmp_path, "(x); x")
        assert main(["eval", path, "--set", "x=1"]) == 0
        assert main(["eval", path, "--set", "x=1", "--clear-on-group"]) == 1

    def test_tokenize(self, capsys, tmp_path):
        assert main(["tokenize", write(tmp_path, "1 + x;")]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Token(NUMBER, '1', 1:2)"
        assert lines[-1].startswith("Token(END_OF_INPUT")

    def test_tokenize_invalid_character(self, capsys, tmp_path):
        assert main(["tokenize", write(tmp_path, "1 $")]) == 1
        assert "Lexer error" in capsys.readouterr().out

    def test_functions(self, capsys, tmp_path):
        path = write(tmp_path, "function double(x) => x * 2;\nfunction add(a, b) => a + b;")
        assert main(["functions", path]) == 0
        out = capsys.readouterr().out
        assert "Function: double(x)" in out
        assert "Function: add(a, b)" in out
        assert "body: a + b ;" in out
