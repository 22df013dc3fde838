"""Unit tests for JsonCatalogStore."""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from i18n_extractor.domain.errors import CatalogWriteError
from i18n_extractor.infrastructure.gateways.catalog_gateway import JsonCatalogStore
from i18n_extractor.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestLoad:
    """Permissive reads."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        telemetry = Mock()
        store = JsonCatalogStore(FileSystemGateway(), telemetry=telemetry)
        assert store.load(str(tmp_path / "missing.json")) == {}
        telemetry.warning.assert_not_called()

    def test_existing_catalog_is_returned(self, tmp_path: Path) -> None:
        target = tmp_path / "catalog.json"
        target.write_text(json.dumps({"a": {"b": "c"}}), encoding="utf-8")
        assert JsonCatalogStore(FileSystemGateway()).load(str(target)) == {"a": {"b": "c"}}

    def test_invalid_json_is_empty_and_warned(self, tmp_path: Path) -> None:
        target = tmp_path / "catalog.json"
        target.write_text("{ not json", encoding="utf-8")
        telemetry = Mock()
        store = JsonCatalogStore(FileSystemGateway(), telemetry=telemetry)
        assert store.load(str(target)) == {}
        telemetry.warning.assert_called_once()
        assert "starting from an empty catalog" in telemetry.warning.call_args[0][0]

    def test_non_object_json_is_empty_and_warned(self, tmp_path: Path) -> None:
        target = tmp_path / "catalog.json"
        target.write_text("[1, 2]", encoding="utf-8")
        telemetry = Mock()
        assert JsonCatalogStore(FileSystemGateway(), telemetry=telemetry).load(str(target)) == {}
        assert "JSON list" in telemetry.warning.call_args[0][0]

    def test_too_deeply_nested_catalog_is_empty_and_warned(self, tmp_path: Path) -> None:
        target = tmp_path / "catalog.json"
        depth = 100_000
        target.write_text('{"a": ' * depth + "1" + "}" * depth, encoding="utf-8")
        telemetry = Mock()
        assert JsonCatalogStore(FileSystemGateway(), telemetry=telemetry).load(str(target)) == {}
        telemetry.warning.assert_called_once()

    def test_warning_without_telemetry_goes_to_log(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        target = tmp_path / "catalog.json"
        target.write_text("oops", encoding="utf-8")
        with caplog.at_level("WARNING", logger="i18n_extractor"):
            assert JsonCatalogStore(FileSystemGateway()).load(str(target)) == {}
        assert "could not be read" in caplog.text


class TestSave:
    """Pretty-printed UTF-8 writes."""

    def test_writes_two_space_json_and_creates_dirs(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir" / "catalog.json"
        JsonCatalogStore(FileSystemGateway()).save(str(target), {"b": "ü", "a": {"x": [1]}})
        content = target.read_text(encoding="utf-8")
        assert content == '{\n  "b": "ü",\n  "a": {\n    "x": [\n      1\n    ]\n  }\n}'

    def test_indent_is_always_two_spaces(self, tmp_path: Path) -> None:
        target = tmp_path / "catalog.json"
        JsonCatalogStore(FileSystemGateway()).save(str(target), {"a": {"b": 1}})
        assert target.read_text(encoding="utf-8") == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_write_failure_raises_catalog_write_error(self) -> None:
        filesystem = Mock()
        filesystem.parent_dir.return_value = "/readonly"
        filesystem.write_text.side_effect = PermissionError(13, "Permission denied")
        with pytest.raises(CatalogWriteError, match="Permission denied"):
            JsonCatalogStore(filesystem).save("/readonly/catalog.json", {"a": 1})
