"""CLI entry points for i18n-extract - Thin Controller using Typer."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from i18n_extractor.domain.config import MigrationConfig
from i18n_extractor.domain.constants import CATALOG_INDENT
from i18n_extractor.domain.entities import MigrationStatus
from i18n_extractor.domain.errors import I18nExtractorError
from i18n_extractor.domain.extraction import ExtractionEngine
from i18n_extractor.domain.protocols import (
    CatalogStoreProtocol,
    FileSystemProtocol,
    TelemetryPort,
)
from i18n_extractor.interface.telemetry import configure_logging
from i18n_extractor.use_cases.migrate_file import MigrateFileUseCase

EXIT_CODES: dict[MigrationStatus, int] = {
    MigrationStatus.SUCCESS: 0,
    MigrationStatus.NO_DATA: 0,
    MigrationStatus.FAILED: 1,
    MigrationStatus.PARTIAL: 2,
}


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config: MigrationConfig
    telemetry: TelemetryPort
    engine: ExtractionEngine
    filesystem: FileSystemProtocol
    catalog_store: CatalogStoreProtocol


def create_app(deps: CLIDependencies) -> typer.Typer:
    """Create the Typer app with explicitly injected dependencies."""
    app = typer.Typer(
        name="i18n-extract",
        help="Move translation strings out of JS/TS sources into JSON catalogs.",
        add_completion=False,
    )

    def _use_case(config: MigrationConfig) -> MigrateFileUseCase:
        return MigrateFileUseCase(
            engine=deps.engine,
            catalog_store=deps.catalog_store,
            filesystem=deps.filesystem,
            telemetry=deps.telemetry,
            config=config,
        )

    @app.command()
    def extract(
        source: Path = typer.Argument(..., help="Source file with translation strings embedded in code"),
        target: Path = typer.Argument(..., help="JSON catalog to create or merge into"),
        no_replace: bool = typer.Option(
            False, "--no-replace", help="Leave the source file untouched after extraction"),
        warning_message: Optional[str] = typer.Option(
            None, "--warning-message", help="Text appended to the migration marker"),
        dry_run: bool = typer.Option(
            False, "--dry-run", help="Extract and merge in memory only; write nothing"),
        as_json: bool = typer.Option(
            False, "--json", help="Print the result as JSON instead of the summary line"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    ) -> None:
        """Extract SOURCE into the TARGET catalog and replace SOURCE with a migration marker."""
        configure_logging(verbose)
        if verbose:
            deps.telemetry.handshake()
        config = deps.config.with_overrides(
            replace_source=False if no_replace else None,
            warning_message=warning_message,
        )
        result = _use_case(config).execute(str(source), str(target), dry_run=dry_run)
        if as_json:
            typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            typer.echo(result.message)
        raise typer.Exit(code=EXIT_CODES[result.status])

    @app.command()
    def show(
        source: Path = typer.Argument(..., help="Source file to inspect"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    ) -> None:
        """Print what would be extracted from SOURCE without writing anything."""
        configure_logging(verbose)
        if verbose:
            deps.telemetry.handshake()
        try:
            extracted = _use_case(deps.config).extract_file(str(source))
        except I18nExtractorError as e:
            deps.telemetry.error(f"Error processing {source}: {e}")
            raise typer.Exit(code=1) from e
        typer.echo(json.dumps(extracted, indent=CATALOG_INDENT, ensure_ascii=False))

    return app
