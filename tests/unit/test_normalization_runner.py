import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from resume_doctor.documents.background import NormalizationRunner
from resume_doctor.documents.exceptions import EmptyDocumentError
from resume_doctor.documents.models import NormalizedDocument
from resume_doctor.session.state import SessionState


def _document(text: str) -> NormalizedDocument:
    return NormalizedDocument(text=text, word_count=len(text.split()), page_count=1)


class TestNormalizationRunner:
    def test_installs_result_as_active_document(self) -> None:
        normalizer = MagicMock()
        normalizer.normalize.return_value = _document("Jane Doe engineer")
        session = SessionState()
        runner = NormalizationRunner(normalizer, session)

        result = runner.submit("Jane Doe engineer").result(timeout=5)
        runner.shutdown()

        assert session.document == result

    def test_stale_result_does_not_overwrite_newer_one(self) -> None:
        release_first = threading.Event()
        first_started = threading.Event()

        def normalize(document: str) -> NormalizedDocument:
            if document == "first":
                first_started.set()
                release_first.wait(timeout=5)
            return _document(document)

        normalizer = MagicMock()
        normalizer.normalize.side_effect = normalize
        session = SessionState()
        runner = NormalizationRunner(
            normalizer, session, executor=ThreadPoolExecutor(max_workers=2)
        )

        first = runner.submit("first")
        assert first_started.wait(timeout=5)
        second = runner.submit("second")
        second.result(timeout=5)
        release_first.set()
        first.result(timeout=5)
        runner.shutdown()

        assert session.document is not None
        assert session.document.text == "second"

    def test_failure_of_latest_upload_clears_document(self) -> None:
        normalizer = MagicMock()
        normalizer.normalize.side_effect = [
            _document("Jane Doe engineer"),
            EmptyDocumentError("No readable text was found in the document."),
        ]
        session = SessionState()
        runner = NormalizationRunner(normalizer, session)

        runner.submit("good").result(timeout=5)
        with pytest.raises(EmptyDocumentError):
            runner.submit("bad").result(timeout=5)
        runner.shutdown()

        assert session.document is None

    def test_failure_of_stale_upload_keeps_newer_document(self) -> None:
        release_first = threading.Event()
        first_started = threading.Event()

        def normalize(document: str) -> NormalizedDocument:
            if document == "first":
                first_started.set()
                release_first.wait(timeout=5)
                raise EmptyDocumentError("No readable text was found in the document.")
            return _document(document)

        normalizer = MagicMock()
        normalizer.normalize.side_effect = normalize
        session = SessionState()
        runner = NormalizationRunner(
            normalizer, session, executor=ThreadPoolExecutor(max_workers=2)
        )

        first = runner.submit("first")
        assert first_started.wait(timeout=5)
        runner.submit("second").result(timeout=5)
        release_first.set()
        with pytest.raises(EmptyDocumentError):
            first.result(timeout=5)
        runner.shutdown()

        assert session.document is not None
        assert session.document.text == "second"
