"""
Prueba de humo de la IDE con el runner de pruebas de Streamlit.
"""

from pathlib import Path

import pytest

testing = pytest.importorskip("streamlit.testing.v1")

APP = Path(__file__).resolve().parents[1] / "minicompiler" / "ide" / "app.py"


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("MINICOMPILER_IDE_ACE", "0")
    at = testing.AppTest.from_file(str(APP), default_timeout=30)
    at.run()
    return at


def _state(at) -> str:
    return at.session_state["session"].state.value


def test_starts_without_errors(app):
    assert not app.exception
    assert _state(app) == "not-started"


def test_stages_run_in_order(app):
    app.button(key="btn_lexical").click().run()
    assert _state(app) == "lex-passed"
    app.button(key="btn_syntax").click().run()
    assert _state(app) == "syntax-passed"
    app.button(key="btn_semantic").click().run()
    assert not app.exception
    assert app.session_state["session"].semantic_outcome.messages == []


def test_editing_resets_progress(app):
    app.button(key="btn_lexical").click().run()
    app.text_area(key="code_editor").input("int x = 5").run()
    assert _state(app) == "not-started"
    app.button(key="btn_lexical").click().run()
    app.button(key="btn_syntax").click().run()
    assert _state(app) == "lex-passed"
    assert "Missing semicolon at or after assignment on line 1." in app.session_state["session"].transcript()


def test_clear(app):
    app.button(key="btn_lexical").click().run()
    app.button(key="btn_clear").click().run()
    assert app.session_state["session"].source == ""
    assert _state(app) == "not-started"
