import sys
from pathlib import Path
from typing import Optional

import typer

from resume_doctor.analysis.cooldown import CooldownTimer
from resume_doctor.analysis.models import AnalysisResult
from resume_doctor.analysis.orchestrator import build_orchestrator
from resume_doctor.config.settings import Settings
from resume_doctor.documents.background import NormalizationRunner
from resume_doctor.documents.exceptions import ParseError
from resume_doctor.documents.factory import DocumentNormalizerFactory
from resume_doctor.documents.models import NormalizedDocument, RawDocument
from resume_doctor.logging.logger import Log
from resume_doctor.prompting.models import AnalysisConfig, Depth, Domain, ExperienceLevel
from resume_doctor.session.credential_store import BaseCredentialStore, JsonFileCredentialStore
from resume_doctor.session.state import SessionState

app = typer.Typer(help="Analyze a resume against a target role with an LLM.")


def _read_document(path: str) -> RawDocument:
    if path == "-":
        return RawDocument.from_text(sys.stdin.read())
    file_path = Path(path)
    if not file_path.is_file():
        typer.echo(f"File not found: {path}", err=True)
        raise typer.Exit(code=2)
    return RawDocument(content=file_path.read_bytes(), filename=file_path.name)


def _normalize(settings: Settings, session: SessionState, path: str) -> NormalizedDocument:
    runner = NormalizationRunner(DocumentNormalizerFactory.create(settings), session)
    try:
        return runner.submit(_read_document(path)).result()
    except ParseError as exc:
        typer.echo(f"Could not read resume: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        runner.shutdown()


def _resolve_api_key(
    store: BaseCredentialStore, api_key: str | None, remember: bool | None
) -> str:
    if remember is False:
        store.set_remember(False)
        store.remove_api_key()
    if api_key:
        if remember:
            store.set_remember(True)
            store.set_api_key(api_key)
            Log.info(f"Remembering API key {Log.mask(api_key)}")
        return api_key
    if store.get_remember():
        stored = store.get_api_key() or ""
        Log.debug(f"Using stored API key {Log.mask(stored)}")
        return stored
    return ""


def _echo_warnings(document: NormalizedDocument) -> None:
    for warning in document.warnings:
        typer.echo(f"warning: {warning}", err=True)


class _StreamPrinter:
    """Prints only the text each new snapshot adds."""

    def __init__(self) -> None:
        self._printed = 0

    def __call__(self, result: AnalysisResult | None) -> None:
        if result is None:
            if self._printed:
                typer.echo("\n[partial analysis discarded]", err=True)
            self._printed = 0
            return
        typer.echo(result.content[self._printed :], nl=False)
        self._printed = len(result.content)


@app.command()
def inspect(
    path: str = typer.Argument(..., help="Resume file (PDF, DOCX, Markdown, text) or '-' for stdin"),
    show_text: bool = typer.Option(False, "--show-text", help="Print the normalized text"),
) -> None:
    """Normalize a resume and report its metrics and warnings."""
    settings = Settings()
    Log.configure(settings.log_level)
    document = _normalize(settings, SessionState(), path)

    typer.echo(f"Format: {document.source_format.value}")
    typer.echo(f"Words: {document.word_count}")
    typer.echo(f"Estimated pages: {document.page_count}")
    _echo_warnings(document)
    if show_text:
        typer.echo("")
        typer.echo(document.text)


@app.command()
def analyze(
    path: str = typer.Argument(..., help="Resume file (PDF, DOCX, Markdown, text) or '-' for stdin"),
    role: str = typer.Option(..., "--role", help="Target role"),
    company: str = typer.Option(..., "--company", help="Target company"),
    level: ExperienceLevel = typer.Option(..., "--level", help="Experience level"),
    depth: Depth = typer.Option(Depth.FULL, "--depth", help="Analysis depth"),
    domain: Domain = typer.Option(Domain.UNIVERSAL, "--domain", help="Resume domain"),
    geo: Optional[str] = typer.Option(None, "--geo", help="Geographic focus"),
    focus: Optional[str] = typer.Option(None, "--focus", help="Special focus areas"),
    memo: Optional[str] = typer.Option(None, "--memo", help="Free-form notes for the reviewer"),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", envvar="RESUME_DOCTOR_API_KEY", help="Generation API key"
    ),
    remember: Optional[bool] = typer.Option(
        None, "--remember/--no-remember", help="Store the API key for later runs"
    ),
) -> None:
    """Normalize a resume and stream an analysis for the target role."""
    settings = Settings()
    Log.configure(settings.log_level)
    store = JsonFileCredentialStore(settings.credential_store_path)
    session = SessionState(api_key=_resolve_api_key(store, api_key, remember))

    document = _normalize(settings, session, path)
    _echo_warnings(document)

    config = AnalysisConfig(
        depth=depth,
        domain=domain,
        target_role=role,
        target_company=company,
        experience_level=level,
        geographic_focus=geo,
        special_focus=focus,
        memo=memo,
    )
    orchestrator = build_orchestrator(
        settings, session, cooldown=CooldownTimer(run_in_background=False)
    )
    orchestrator.subscribe(_StreamPrinter())
    outcome = orchestrator.submit(config)
    if outcome.failure is not None:
        typer.echo(f"Analysis failed: {outcome.failure.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo("")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
