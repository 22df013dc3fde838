"""JSON catalog storage - Infrastructure implementation of CatalogStoreProtocol."""

import json
import logging
from typing import Any, Optional

from i18n_extractor.domain.constants import CATALOG_INDENT
from i18n_extractor.domain.errors import CatalogWriteError
from i18n_extractor.domain.protocols import (
    CatalogStoreProtocol,
    FileSystemProtocol,
    TelemetryPort,
)

logger = logging.getLogger(__name__)


class JsonCatalogStore(CatalogStoreProtocol):
    """Reads catalogs permissively and writes them as 2-space indented UTF-8 JSON."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self._fs = filesystem
        self._telemetry = telemetry

    def _warn(self, message: str) -> None:
        if self._telemetry is not None:
            self._telemetry.warning(message)
        else:
            logger.warning(message)

    def load(self, path: str) -> dict[str, Any]:
        """Return the catalog at path; a missing, unreadable or non-object file yields {}."""
        if not self._fs.exists(path):
            logger.debug("No existing catalog at %s; starting empty", path)
            return {}
        try:
            content = self._fs.read_text(path, encoding="utf-8")
            data = json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            self._warn(f"Existing catalog {path} could not be read ({e}); starting from an empty catalog.")
            return {}
        if not isinstance(data, dict):
            self._warn(
                f"Existing catalog {path} is a JSON {type(data).__name__}, not an object; "
                "starting from an empty catalog."
            )
            return {}
        return data

    def save(self, path: str, catalog: dict[str, Any]) -> None:
        """Write the catalog, creating parent directories. Raises CatalogWriteError."""
        content = json.dumps(catalog, indent=CATALOG_INDENT, ensure_ascii=False)
        try:
            self._fs.make_dirs(self._fs.parent_dir(path), exist_ok=True)
            self._fs.write_text(path, content, encoding="utf-8")
        except OSError as e:
            raise CatalogWriteError(f"Cannot write catalog {path}: {e.strerror or e}") from e
