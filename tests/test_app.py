from pathlib import Path

from streamlit.testing.v1 import AppTest

from profile_match_ai.agents.analysis_orchestrator import AnalysisOrchestrator
from profile_match_ai.schemas.analysis import AnalysisState

APP_PATH = str(Path(__file__).resolve().parent.parent / "profile_match_ai" / "app.py")


def _app() -> AppTest:
    return AppTest.from_file(APP_PATH, default_timeout=30)


def test_button_enabled_when_idle():
    at = _app().run()
    button = at.button(key="analyze_btn")
    assert not button.disabled
    assert button.label == "Analyze Profile"


def test_button_disabled_while_orchestrator_running():
    at = _app()
    busy = AnalysisOrchestrator()
    busy._state = AnalysisState.RUNNING
    at.session_state["orchestrator"] = busy
    at.run()
    button = at.button(key="analyze_btn")
    assert button.disabled
    assert button.label == "Analyzing…"


def test_click_with_missing_input_shows_error_and_releases_button():
    at = _app().run()
    at.button(key="analyze_btn").click().run()
    assert any("Missing Information" in e.value for e in at.error)
    assert at.session_state["analyze_requested"] is False
    assert not at.button(key="analyze_btn").disabled
    assert at.session_state["orchestrator"].state == AnalysisState.FAILED


def test_upload_extraction_is_cached_per_file(monkeypatch):
    from profile_match_ai import app
    from profile_match_ai.schemas.document import ExtractedText

    calls = []

    def fake_extract(document):
        calls.append(document.filename)
        return ExtractedText(text=document.payload.decode("utf-8"), filename=document.filename)

    monkeypatch.setattr(app, "extract", fake_extract)
    app._extract_upload.clear()

    first = app._extract_upload(b"Jane Doe, Python", "cv.txt", "text/plain")
    second = app._extract_upload(b"Jane Doe, Python", "cv.txt", "text/plain")
    app._extract_upload(b"John Roe, Go", "other.txt", "text/plain")

    assert first.text == second.text == "Jane Doe, Python"
    assert calls == ["cv.txt", "other.txt"]
