"""Unit tests for MigrateFileUseCase."""

import json
from unittest.mock import Mock

import pytest

from i18n_extractor.domain.config import MigrationConfig
from i18n_extractor.domain.entities import MigrationStatus
from i18n_extractor.domain.errors import CatalogWriteError, SourceParseError
from i18n_extractor.domain.extraction import ExtractionEngine
from i18n_extractor.domain.syntax import (
    ArrayLiteral,
    CallExpression,
    ExportDefault,
    Identifier,
    LogicalOr,
    ObjectLiteral,
    Program,
    Property,
    StringLiteral,
)
from i18n_extractor.use_cases.migrate_file import MigrateFileUseCase

ABS_TARGET = "/abs/catalog.json"


def _program_exporting(**values: str) -> Program:
    props = tuple(Property(k, StringLiteral(v)) for k, v in values.items())
    return Program(body=(ExportDefault(ObjectLiteral(props)),))


@pytest.fixture
def filesystem() -> Mock:
    fs = Mock()
    fs.resolve_path.return_value = ABS_TARGET
    fs.read_text.return_value = "export default { title: 'Hi' }"
    return fs


@pytest.fixture
def parser() -> Mock:
    gateway = Mock()
    gateway.parse_source.return_value = _program_exporting(title="Hi")
    return gateway


@pytest.fixture
def catalog_store() -> Mock:
    store = Mock()
    store.load.return_value = {"existing": "keep"}
    return store


@pytest.fixture
def telemetry() -> Mock:
    return Mock()


def _use_case(
    parser: Mock,
    catalog_store: Mock,
    filesystem: Mock,
    telemetry: Mock,
    config: MigrationConfig = MigrationConfig(warning_message="\n// stop"),
) -> MigrateFileUseCase:
    return MigrateFileUseCase(
        engine=ExtractionEngine(parser=parser),
        catalog_store=catalog_store,
        filesystem=filesystem,
        telemetry=telemetry,
        config=config,
    )


class TestSuccess:
    """Catalog written, then the source is replaced."""

    def test_merges_and_replaces_source(self, parser, catalog_store, filesystem, telemetry) -> None:
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")

        assert result.status is MigrationStatus.SUCCESS
        assert result.ok
        assert result.entries_merged == 1
        assert result.catalog_written and result.source_replaced
        assert result.target_path == ABS_TARGET
        assert result.message == (
            f"Successfully merged 1 top-level entries to {ABS_TARGET}. "
            f'Source file replaced with "MIGRATED TO {ABS_TARGET}"'
        )
        catalog_store.load.assert_called_once_with("catalog.json")
        catalog_store.save.assert_called_once_with("catalog.json", {"existing": "keep", "title": "Hi"})
        filesystem.write_text.assert_called_once_with(
            "src.js", f"MIGRATED TO {ABS_TARGET}\n// stop", encoding="utf-8"
        )

    def test_no_replace_leaves_source(self, parser, catalog_store, filesystem, telemetry) -> None:
        config = MigrationConfig(replace_source=False)
        result = _use_case(parser, catalog_store, filesystem, telemetry, config).execute(
            "src.js", "catalog.json"
        )

        assert result.status is MigrationStatus.SUCCESS
        assert result.message == f"Successfully merged 1 top-level entries to {ABS_TARGET}"
        assert result.catalog_written and not result.source_replaced
        filesystem.write_text.assert_not_called()

    def test_call_sites_take_precedence(self, parser, catalog_store, filesystem, telemetry) -> None:
        call = CallExpression(Identifier("t"), (StringLiteral("save"),))
        parser.parse_source.return_value = Program(
            body=(
                CallExpression(Identifier("useTranslations"), (StringLiteral("form"),)),
                LogicalOr(call, StringLiteral("Save")),
                ExportDefault(ObjectLiteral((Property("ignored", StringLiteral("x")),))),
            )
        )
        catalog_store.load.return_value = {}
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.jsx", "catalog.json")

        assert result.entries_merged == 1
        catalog_store.save.assert_called_once_with("catalog.json", {"form.save": "Save"})


class TestNoData:
    """Nothing to extract: nothing is written."""

    def test_no_export(self, parser, catalog_store, filesystem, telemetry) -> None:
        parser.parse_source.return_value = Program(body=())
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")

        assert result.status is MigrationStatus.NO_DATA
        assert result.ok
        assert result.message == f"No data extracted from src.js. Target file {ABS_TARGET} not modified."
        catalog_store.load.assert_not_called()
        catalog_store.save.assert_not_called()
        filesystem.write_text.assert_not_called()

    def test_empty_object_export(self, parser, catalog_store, filesystem, telemetry) -> None:
        parser.parse_source.return_value = Program(body=(ExportDefault(ObjectLiteral(())),))
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")
        assert result.status is MigrationStatus.NO_DATA


class TestFailures:
    """Errors become FAILED or PARTIAL results, never exceptions."""

    def test_missing_source(self, parser, catalog_store, filesystem, telemetry) -> None:
        filesystem.read_text.side_effect = FileNotFoundError(2, "No such file or directory")
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("missing.js", "catalog.json")

        assert result.status is MigrationStatus.FAILED
        assert not result.ok
        assert result.message == "Error processing missing.js: ENOENT: No such file or directory"
        telemetry.error.assert_called_once_with(result.message)
        catalog_store.save.assert_not_called()

    def test_undecodable_source(self, parser, catalog_store, filesystem, telemetry) -> None:
        filesystem.read_text.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("bin.js", "catalog.json")
        assert result.status is MigrationStatus.FAILED
        assert "invalid start byte" in result.message

    def test_parse_error(self, parser, catalog_store, filesystem, telemetry) -> None:
        parser.parse_source.side_effect = SourceParseError("src.js", 3, 7, "unexpected syntax")
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")

        assert result.status is MigrationStatus.FAILED
        assert result.message == "Error processing src.js: src.js:3:7: unexpected syntax"
        filesystem.write_text.assert_not_called()

    def test_too_deeply_nested_export(self, parser, catalog_store, filesystem, telemetry) -> None:
        value = ArrayLiteral((StringLiteral("leaf"),))
        for _ in range(5000):
            value = ArrayLiteral((value,))
        parser.parse_source.return_value = Program(
            body=(ExportDefault(ObjectLiteral((Property("deep", value),))),)
        )
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("deep.js", "catalog.json")

        assert result.status is MigrationStatus.FAILED
        assert result.message == "Error processing deep.js: deep.js: values are nested too deeply to extract"
        catalog_store.load.assert_not_called()
        filesystem.write_text.assert_not_called()

    def test_catalog_write_error(self, parser, catalog_store, filesystem, telemetry) -> None:
        catalog_store.save.side_effect = CatalogWriteError("Cannot write catalog catalog.json: Permission denied")
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")

        assert result.status is MigrationStatus.FAILED
        assert "Permission denied" in result.message
        assert not result.catalog_written
        filesystem.write_text.assert_not_called()

    def test_source_rewrite_error_is_partial(self, parser, catalog_store, filesystem, telemetry) -> None:
        filesystem.write_text.side_effect = PermissionError(13, "Permission denied")
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")

        assert result.status is MigrationStatus.PARTIAL
        assert not result.ok
        assert result.catalog_written and not result.source_replaced
        assert result.message.endswith("but the source file was not replaced: EACCES: Permission denied")
        catalog_store.save.assert_called_once()


class TestDryRun:
    """Dry runs read the catalog but write nothing."""

    def test_dry_run_writes_nothing(self, parser, catalog_store, filesystem, telemetry) -> None:
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute(
            "src.js", "catalog.json", dry_run=True
        )

        assert result.status is MigrationStatus.SUCCESS
        assert result.entries_merged == 1
        assert not result.catalog_written and not result.source_replaced
        assert result.message.startswith(f"Dry run: would merge 1 top-level entries to {ABS_TARGET}")
        assert "(2 top-level keys after merge)" in result.message
        assert "replace the source file" in result.message
        catalog_store.save.assert_not_called()
        filesystem.write_text.assert_not_called()


class TestHelpers:
    """extract_file and migration_marker."""

    def test_extract_file_returns_mapping(self, parser, catalog_store, filesystem, telemetry) -> None:
        use_case = _use_case(parser, catalog_store, filesystem, telemetry)
        assert use_case.extract_file("src.js") == {"title": "Hi"}
        parser.parse_source.assert_called_once_with("export default { title: 'Hi' }", "src.js")

    def test_migration_marker(self, parser, catalog_store, filesystem, telemetry) -> None:
        use_case = _use_case(parser, catalog_store, filesystem, telemetry)
        assert use_case.migration_marker("/x/y.json") == "MIGRATED TO /x/y.json\n// stop"

    def test_result_serializes(self, parser, catalog_store, filesystem, telemetry) -> None:
        result = _use_case(parser, catalog_store, filesystem, telemetry).execute("src.js", "catalog.json")
        payload = json.loads(json.dumps(result.to_dict()))
        assert payload["status"] == "success"
        assert payload["target_path"] == ABS_TARGET
