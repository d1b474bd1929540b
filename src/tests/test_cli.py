import pytest

from minicompiler import cli


@pytest.fixture
def source_file(tmp_path):
    def write(text: str, name: str = "program.mc", encoding: str = "utf-8"):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return str(path)
    return write


def test_clean_program(source_file, capsys):
    path = source_file("int x = 5;\nx = x + 1;\n")
    assert cli.main(["minicompiler", path]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "Opened file: program.mc" in out
    assert "Syntax OK." in out
    assert "Semantic OK. No issues found." in out


def test_semantic_findings_do_not_fail(source_file, capsys):
    path = source_file("int count;")
    assert cli.main(["minicompiler", path]) == cli.EXIT_OK
    assert "Warning: variable 'count' declared at line 1 but not used." in capsys.readouterr().out


def test_syntax_failure(source_file, capsys):
    path = source_file("int x = 5")
    assert cli.main(["minicompiler", path]) == cli.EXIT_SYNTAX
    out = capsys.readouterr().out
    assert "Missing semicolon at or after assignment on line 1." in out
    assert "--- Semantic Analysis ---" not in out


def test_lexical_failure(source_file, capsys):
    path = source_file("int x;\n@\n")
    assert cli.main(["minicompiler", path]) == cli.EXIT_LEXICAL
    assert "Lexical Error (line 2)" in capsys.readouterr().out


def test_empty_file(source_file, capsys):
    path = source_file("")
    assert cli.main(["minicompiler", path]) == cli.EXIT_USAGE
    assert "No code loaded" in capsys.readouterr().out


def test_whitespace_only_file(source_file, capsys):
    path = source_file("\n  \n\t\n")
    assert cli.main(["minicompiler", path]) == cli.EXIT_USAGE
    out = capsys.readouterr().out
    assert "No tokens found (empty or whitespace-only file)." in out
    assert "--- Syntax Analysis ---" not in out


def test_missing_file(tmp_path, capsys):
    assert cli.main(["minicompiler", str(tmp_path / "nope.mc")]) == cli.EXIT_USAGE
    assert "Could not read file" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["minicompiler"], ["minicompiler", "a", "b"], ["minicompiler", "a", "--encoding"]])
def test_usage(argv, capsys):
    assert cli.main(argv) == cli.EXIT_USAGE
    assert "Uso:" in capsys.readouterr().err


def test_encoding_option(source_file, capsys):
    path = source_file('String s = "ñandú";\ns = "x";\n', encoding="latin-1")
    assert cli.main(["minicompiler", path, "--encoding", "latin-1"]) == cli.EXIT_OK
    assert '[STRING] "ñandú"' in capsys.readouterr().out


def test_encoding_from_environment(source_file, monkeypatch, capsys):
    monkeypatch.setenv("MINICOMPILER_ENCODING", "latin-1")
    path = source_file('String s = "é";\ns = "x";\n', encoding="latin-1")
    assert cli.main(["minicompiler", path]) == cli.EXIT_OK


@pytest.mark.parametrize(
    ("sample", "code"),
    [
        ("ok_declarations.mc", cli.EXIT_OK),
        ("type_error.mc", cli.EXIT_OK),
        ("undeclared.mc", cli.EXIT_OK),
        ("missing_semicolon.mc", cli.EXIT_SYNTAX),
        ("unbalanced.mc", cli.EXIT_SYNTAX),
        ("lexical_error.mc", cli.EXIT_LEXICAL),
    ],
)
def test_bundled_samples(sample, code, capsys):
    from minicompiler.config import REPO_ROOT

    assert cli.main(["minicompiler", str(REPO_ROOT / "samples" / sample)]) == code
