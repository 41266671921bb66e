"""Runs normalization off the caller's thread; the latest upload wins."""

import itertools
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from resume_doctor.documents.exceptions import ParseError
from resume_doctor.documents.models import NormalizedDocument, RawDocument
from resume_doctor.documents.normalizer import DocumentNormalizer
from resume_doctor.logging.logger import Log
from resume_doctor.session.state import SessionState


class NormalizationRunner:
    """Normalizes documents in a worker thread and installs the result.

    Each submission gets a generation number. Only the newest generation may
    write the session's active document, so a slow parse of an older upload
    never overwrites a newer one.
    """

    def __init__(
        self,
        normalizer: DocumentNormalizer,
        session: SessionState,
        executor: Executor | None = None,
    ) -> None:
        self._normalizer = normalizer
        self._session = session
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="normalizer"
        )
        self._generations = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def submit(self, document: RawDocument | str) -> "Future[NormalizedDocument]":
        with self._lock:
            generation = next(self._generations)
            self._latest = generation
        return self._executor.submit(self._run, generation, document)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def _run(self, generation: int, document: RawDocument | str) -> NormalizedDocument:
        try:
            normalized = self._normalizer.normalize(document)
        except ParseError as exc:
            with self._lock:
                if generation == self._latest:
                    self._session.replace_document(None)
            Log.warning(f"Normalization {generation} rejected ({exc.kind.value}): {exc}")
            raise

        with self._lock:
            if generation != self._latest:
                Log.debug(f"Discarding stale normalization {generation}")
                return normalized
            self._session.replace_document(normalized)
        return normalized
