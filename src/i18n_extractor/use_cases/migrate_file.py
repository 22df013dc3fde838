"""Use Case: Migrate File - extract one source file into a JSON catalog."""

import errno
from typing import Any, Optional

from i18n_extractor.domain.config import MigrationConfig
from i18n_extractor.domain.constants import MIGRATION_MARKER_PREFIX
from i18n_extractor.domain.entities import MigrationResult, MigrationStatus
from i18n_extractor.domain.errors import (
    CatalogWriteError,
    I18nExtractorError,
    SourceReadError,
    SourceRewriteError,
)
from i18n_extractor.domain.extraction import ExtractionEngine
from i18n_extractor.domain.merge import CatalogMerger
from i18n_extractor.domain.protocols import (
    CatalogStoreProtocol,
    FileSystemProtocol,
    TelemetryPort,
)


class MigrateFileUseCase:
    """Drive read -> extract -> merge -> write -> mark for a single source/target pair."""

    def __init__(
        self,
        engine: ExtractionEngine,
        catalog_store: CatalogStoreProtocol,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        config: MigrationConfig,
        merger: Optional[CatalogMerger] = None,
    ) -> None:
        self.engine = engine
        self.catalog_store = catalog_store
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.config = config
        self.merger = merger or CatalogMerger()

    def execute(self, source_path: str, target_path: str, dry_run: bool = False) -> MigrationResult:
        """
        Migrate ``source_path`` into the catalog at ``target_path``.

        Never raises. Failures come back as FAILED results; a catalog that was
        written before the source rewrite failed comes back as PARTIAL.

        Args:
            source_path: File containing translation strings embedded in code.
            target_path: JSON catalog to create or merge into.
            dry_run: Extract and merge in memory only; write nothing.

        Returns:
            MigrationResult with the summary message.
        """
        absolute_target = self.filesystem.resolve_path(target_path)
        self.telemetry.step(f"Extracting {source_path}")

        try:
            extracted = self.extract_file(source_path)
        except I18nExtractorError as e:
            return self._failed(source_path, absolute_target, e)

        if not extracted:
            message = (
                f"No data extracted from {source_path}. "
                f"Target file {absolute_target} not modified."
            )
            self.telemetry.step(message)
            return MigrationResult(
                status=MigrationStatus.NO_DATA,
                message=message,
                source_path=source_path,
                target_path=absolute_target,
            )

        entry_count = len(extracted)
        self.telemetry.debug(f"Extracted {entry_count} top-level entries from {source_path}")
        existing = self.catalog_store.load(target_path)
        merged = self.merger.merge(existing, extracted)

        if dry_run:
            return self._dry_run_result(source_path, absolute_target, entry_count, merged)

        try:
            self.catalog_store.save(target_path, merged)
        except CatalogWriteError as e:
            return self._failed(source_path, absolute_target, e)

        message = f"Successfully merged {entry_count} top-level entries to {absolute_target}"
        if not self.config.replace_source:
            self.telemetry.step(message)
            return MigrationResult(
                status=MigrationStatus.SUCCESS,
                message=message,
                source_path=source_path,
                target_path=absolute_target,
                entries_merged=entry_count,
                catalog_written=True,
            )

        marker = self.migration_marker(absolute_target)
        try:
            self._rewrite_source(source_path, marker)
        except SourceRewriteError as e:
            message = f"{message}, but the source file was not replaced: {e}"
            self.telemetry.error(message)
            return MigrationResult(
                status=MigrationStatus.PARTIAL,
                message=message,
                source_path=source_path,
                target_path=absolute_target,
                entries_merged=entry_count,
                catalog_written=True,
            )

        message = (
            f'{message}. Source file replaced with "{MIGRATION_MARKER_PREFIX}{absolute_target}"'
        )
        self.telemetry.step(message)
        return MigrationResult(
            status=MigrationStatus.SUCCESS,
            message=message,
            source_path=source_path,
            target_path=absolute_target,
            entries_merged=entry_count,
            catalog_written=True,
            source_replaced=True,
        )

    def extract_file(self, source_path: str) -> dict[str, Any]:
        """Read and extract ``source_path`` without touching disk. Raises I18nExtractorError."""
        source = self._read_source(source_path)
        return self.engine.extract_source(source, source_path)

    def migration_marker(self, absolute_target: str) -> str:
        """Text that replaces a migrated source file."""
        return f"{MIGRATION_MARKER_PREFIX}{absolute_target}{self.config.warning_message}"

    def _read_source(self, source_path: str) -> str:
        try:
            return self.filesystem.read_text(source_path, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(self._describe(e)) from e

    def _rewrite_source(self, source_path: str, marker: str) -> None:
        try:
            self.filesystem.write_text(source_path, marker, encoding="utf-8")
        except OSError as e:
            raise SourceRewriteError(self._describe(e)) from e

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, OSError) and error.errno is not None:
            code = errno.errorcode.get(error.errno, str(error.errno))
            return f"{code}: {error.strerror}"
        return str(error)

    def _failed(self, source_path: str, absolute_target: str, error: Exception) -> MigrationResult:
        message = f"Error processing {source_path}: {error}"
        self.telemetry.error(message)
        return MigrationResult(
            status=MigrationStatus.FAILED,
            message=message,
            source_path=source_path,
            target_path=absolute_target,
        )

    def _dry_run_result(
        self,
        source_path: str,
        absolute_target: str,
        entry_count: int,
        merged: dict[str, Any],
    ) -> MigrationResult:
        message = (
            f"Dry run: would merge {entry_count} top-level entries to {absolute_target} "
            f"({len(merged)} top-level keys after merge)"
        )
        if self.config.replace_source:
            message += f' and replace the source file with "{MIGRATION_MARKER_PREFIX}{absolute_target}"'
        self.telemetry.step(message)
        return MigrationResult(
            status=MigrationStatus.SUCCESS,
            message=message,
            source_path=source_path,
            target_path=absolute_target,
            entries_merged=entry_count,
        )
