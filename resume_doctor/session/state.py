import threading

from resume_doctor.analysis.models import AnalysisFailure, AnalysisResult
from resume_doctor.documents.models import NormalizedDocument
from resume_doctor.prompting.models import AnalysisConfig


class SessionState:
    """Active values of one user session.

    Every slot holds an immutable value that is replaced as a whole, never
    mutated in place, so readers see either the previous or the next value.
    """

    def __init__(self, api_key: str = "") -> None:
        self._lock = threading.Lock()
        self._document: NormalizedDocument | None = None
        self._config: AnalysisConfig | None = None
        self._result: AnalysisResult | None = None
        self._last_failure: AnalysisFailure | None = None
        self._api_key = api_key

    @property
    def document(self) -> NormalizedDocument | None:
        return self._document

    @property
    def config(self) -> AnalysisConfig | None:
        return self._config

    @property
    def result(self) -> AnalysisResult | None:
        return self._result

    @property
    def last_failure(self) -> AnalysisFailure | None:
        return self._last_failure

    @property
    def api_key(self) -> str:
        return self._api_key

    def replace_document(self, document: NormalizedDocument | None) -> None:
        with self._lock:
            self._document = document

    def replace_config(self, config: AnalysisConfig | None) -> None:
        with self._lock:
            self._config = config

    def replace_result(self, result: AnalysisResult | None) -> None:
        with self._lock:
            self._result = result

    def replace_failure(self, failure: AnalysisFailure | None) -> None:
        with self._lock:
            self._last_failure = failure

    def replace_api_key(self, api_key: str) -> None:
        with self._lock:
            self._api_key = api_key
