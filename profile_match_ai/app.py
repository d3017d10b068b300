"""
Profile Match AI – Streamlit frontend.
No business logic in layout; extraction, prompting, inference and validation live in the pipeline.
"""

import asyncio
from typing import Optional

import streamlit as st

from profile_match_ai.agents.analysis_orchestrator import AnalysisOrchestrator
from profile_match_ai.config import MODEL_NAME, OLLAMA_URL, TEMPERATURE, TOP_P
from profile_match_ai.cv_pipeline.text_extractor import extract, supported_extensions
from profile_match_ai.errors import AnalysisError
from profile_match_ai.schemas.analysis import AnalysisRequest, AnalysisResult, InferenceOptions
from profile_match_ai.schemas.document import ExtractedText, RawDocument

IMPROVED_PROFILE_FILENAME = "improved-profile.txt"


def _orchestrator() -> AnalysisOrchestrator:
    """One orchestrator per browser session."""
    if "orchestrator" not in st.session_state:
        st.session_state["orchestrator"] = AnalysisOrchestrator()
    return st.session_state["orchestrator"]


def _run_analysis(orchestrator: AnalysisOrchestrator, request: AnalysisRequest) -> AnalysisResult:
    """Drive the async pipeline from Streamlit's sync script run."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(orchestrator.run(request))
    finally:
        loop.close()


@st.cache_data(show_spinner=False, max_entries=16)
def _extract_upload(payload: bytes, filename: str, mime_type: Optional[str]) -> ExtractedText:
    """Extraction keyed on the file bytes, so reruns do not re-parse the same upload."""
    return extract(RawDocument(payload=payload, filename=filename, mime_type=mime_type))


def _profile_from_upload(uploaded) -> Optional[str]:
    """Extract profile text from an uploaded file; show the error and return None on failure."""
    extracted = _extract_upload(uploaded.getvalue(), uploaded.name, uploaded.type)
    if not extracted.ok:
        st.error(extracted.error)
        return None
    st.success(f"Loaded {extracted.filename} ({len(extracted.text)} characters)")
    return extracted.text


def _request_analysis() -> None:
    st.session_state["analyze_requested"] = True


def _render_list(title: str, items: list, empty_text: str) -> None:
    st.subheader(f"{title} ({len(items)})")
    if not items:
        st.caption(empty_text)
        return
    for item in items:
        st.markdown(f"- {item}")


def render_results(result: AnalysisResult) -> None:
    """Matches, gaps, suggestions and the improved profile with copy/download actions."""
    col1, col2 = st.columns(2)
    with col1:
        _render_list("Matches", result.matches, "No matching skills identified.")
    with col2:
        _render_list("Gaps", result.gaps, "No gaps identified.")

    _render_list("Suggestions", result.suggestions, "No suggestions returned.")

    st.subheader("Improved Profile")
    # st.code renders a copy-to-clipboard button
    st.code(result.improved_profile, language=None, wrap_lines=True)
    st.download_button(
        "Download improved profile",
        data=result.improved_profile.encode("utf-8"),
        file_name=IMPROVED_PROFILE_FILENAME,
        mime="text/plain",
        key="download_improved_profile",
    )


def render_layout() -> None:
    """Streamlit page layout; analysis runs through the session's orchestrator."""
    st.set_page_config(page_title="Profile Match AI", layout="wide")
    st.title("Profile Match AI")
    st.markdown("*Compare your profile with a job description using a local Ollama model.*")
    st.divider()

    if "result" not in st.session_state:
        st.session_state["result"] = None
    if "error" not in st.session_state:
        st.session_state["error"] = None
    if "analyze_requested" not in st.session_state:
        st.session_state["analyze_requested"] = False

    orchestrator = _orchestrator()

    # ----- Inference settings -----
    with st.expander("Ollama settings", expanded=False):
        scol1, scol2 = st.columns(2)
        with scol1:
            endpoint = st.text_input("Ollama URL", value=OLLAMA_URL, key="ollama_url")
        with scol2:
            model = st.text_input("Model", value=MODEL_NAME, key="model")
        tcol1, tcol2 = st.columns(2)
        with tcol1:
            temperature = st.slider("Temperature", 0.0, 2.0, TEMPERATURE, 0.05, key="temperature")
        with tcol2:
            top_p = st.slider("Top P", 0.0, 1.0, TOP_P, 0.05, key="top_p")
        st.caption(f"Make sure Ollama is running and the model is installed: `ollama pull {model}`")

    # ----- Inputs -----
    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Your Profile")
        uploaded = st.file_uploader(
            "Upload resume (optional)",
            type=supported_extensions(),
            key="profile_file",
        )
        uploaded_text = _profile_from_upload(uploaded) if uploaded is not None else None
        profile_text = st.text_area(
            "Profile text",
            value=uploaded_text or "",
            height=300,
            placeholder="Paste your resume or professional summary…",
            key=f"profile_text_{uploaded.name if uploaded is not None else 'typed'}",
        )
    with col2:
        st.subheader("Job Description")
        job_description = st.text_area(
            "Job description",
            height=300,
            placeholder="Paste the target job description…",
            key="job_description",
        )

    # Click only flags the request; the analysis runs on the next rerun with the button disabled
    busy = st.session_state["analyze_requested"] or orchestrator.is_analyzing
    st.button(
        "Analyzing…" if busy else "Analyze Profile",
        type="primary",
        disabled=busy,
        key="analyze_btn",
        on_click=_request_analysis,
    )

    # ----- Run analysis (only after a click) -----
    if st.session_state["analyze_requested"] and not orchestrator.is_analyzing:
        request = AnalysisRequest(
            profile_text=profile_text,
            job_description=job_description,
            endpoint=endpoint,
            model=model,
            options=InferenceOptions(temperature=temperature, top_p=top_p),
        )
        with st.spinner("Analyzing your profile…"):
            try:
                st.session_state["result"] = _run_analysis(orchestrator, request)
                st.session_state["error"] = None
            except AnalysisError as e:
                st.session_state["result"] = None
                st.session_state["error"] = e
            finally:
                st.session_state["analyze_requested"] = False
        st.rerun()

    error: Optional[AnalysisError] = st.session_state.get("error")
    if error is not None:
        st.error(f"**{error.title}:** {error.message}")

    result: Optional[AnalysisResult] = st.session_state.get("result")
    st.divider()
    if result is not None:
        render_results(result)
    elif error is None:
        st.info("Provide your profile and a job description, then click **Analyze Profile**.")


if __name__ == "__main__":
    render_layout()
