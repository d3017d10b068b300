"""Analysis Orchestrator: prompt -> inference -> parse, one run in flight per instance."""

from typing import Optional

from profile_match_ai.config import MODEL_NAME, OLLAMA_URL
from profile_match_ai.cv_pipeline.prompt_builder import build_prompt
from profile_match_ai.cv_pipeline.text_extractor import extract
from profile_match_ai.errors import (
    AnalysisError,
    AnalysisInProgressError,
    ERRORS_BY_KIND,
    ErrorKind,
    MalformedResponseError,
    MissingInputError,
    ServiceUnavailableError,
)
from profile_match_ai.schemas.analysis import (
    AnalysisRequest,
    AnalysisResult,
    AnalysisState,
    InferenceOptions,
)
from profile_match_ai.schemas.document import RawDocument
from profile_match_ai.services.inference_client import OllamaClient
from profile_match_ai.services.result_parser import parse_completion
from profile_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


class AnalysisOrchestrator:
    """
    Runs one analysis at a time: IDLE -> RUNNING -> SUCCEEDED | FAILED.
    A run requested while another is in flight is rejected, not queued.
    Instances share no state; use one per user session.
    """

    def __init__(self, client: Optional[OllamaClient] = None) -> None:
        self._client = client or OllamaClient()
        self._state = AnalysisState.IDLE
        self._result: Optional[AnalysisResult] = None
        self._error: Optional[AnalysisError] = None

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def is_analyzing(self) -> bool:
        return self._state == AnalysisState.RUNNING

    @property
    def last_result(self) -> Optional[AnalysisResult]:
        return self._result

    @property
    def last_error(self) -> Optional[AnalysisError]:
        return self._error

    def _start(self) -> None:
        if self.is_analyzing:
            logger.warning("Analysis requested while another is running; rejected")
            raise AnalysisInProgressError()
        self._state = AnalysisState.RUNNING
        self._result = None
        self._error = None

    def _fail(self, error: AnalysisError) -> AnalysisError:
        self._state = AnalysisState.FAILED
        self._error = error
        logger.warning("Analysis failed (%s): %s", error.kind.value, error.message)
        return error

    def _abandon(self) -> None:
        """A run interrupted by cancellation must not leave the instance stuck in RUNNING."""
        if self.is_analyzing:
            self._fail(ServiceUnavailableError("Analysis was cancelled before the model answered."))

    async def run(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyze a profile against a job description.
        Raises AnalysisInProgressError if a run is already in flight, otherwise
        the first stage's AnalysisError. Never returns a partial result.
        """
        self._start()
        try:
            return await self._run_stages(request)
        except BaseException:
            self._abandon()
            raise

    async def run_document(
        self,
        document: RawDocument,
        job_description: str,
        endpoint: str = OLLAMA_URL,
        model: str = MODEL_NAME,
        options: Optional[InferenceOptions] = None,
    ) -> AnalysisResult:
        """Extract the profile from an uploaded document, then run the analysis on it."""
        self._start()
        try:
            extracted = extract(document)
            if not extracted.ok:
                error_cls = ERRORS_BY_KIND[extracted.error_kind or ErrorKind.EXTRACTION_FAILURE]
                raise self._fail(error_cls(extracted.error))
            request = AnalysisRequest(
                profile_text=extracted.text,
                job_description=job_description,
                endpoint=endpoint,
                model=model,
                options=options or InferenceOptions(),
            )
            return await self._run_stages(request)
        except BaseException:
            self._abandon()
            raise

    async def _run_stages(self, request: AnalysisRequest) -> AnalysisResult:
        if not request.profile_text.strip() or not request.job_description.strip():
            raise self._fail(MissingInputError())

        prompt = build_prompt(request.profile_text, request.job_description)
        logger.info("Analysis started: model=%s endpoint=%s", request.model, request.endpoint)

        try:
            completion = await self._client.complete(
                request.endpoint, request.model, prompt, request.options
            )
        except AnalysisError as e:
            raise self._fail(e)
        except Exception as e:
            logger.exception("Unexpected inference failure: %s", e)
            raise self._fail(ServiceUnavailableError(f"Inference call failed: {e}")) from e

        try:
            result = parse_completion(completion)
        except AnalysisError as e:
            raise self._fail(e)
        except Exception as e:
            logger.exception("Unexpected parse failure: %s", e)
            raise self._fail(MalformedResponseError()) from e

        self._state = AnalysisState.SUCCEEDED
        self._result = result
        logger.info(
            "Analysis finished: matches=%s gaps=%s suggestions=%s",
            len(result.matches),
            len(result.gaps),
            len(result.suggestions),
        )
        return result
