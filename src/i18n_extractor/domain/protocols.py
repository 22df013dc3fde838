from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from i18n_extractor.domain.syntax import Program


class ParserGatewayProtocol(Protocol):
    """Protocol for turning source text into the domain syntax model."""

    def parse_source(self, source: str, file_name: str) -> "Program":
        """Parse ``source``; raise SourceParseError when it is structurally invalid."""
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def handshake(self) -> None: ...
    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def parent_dir(self, path: str) -> str:
        """Return the directory containing path."""
        ...

    def make_dirs(self, path: str, exist_ok: bool = True) -> None:
        """Create directory and parent directories if needed."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...


class CatalogStoreProtocol(Protocol):
    """Protocol for loading and persisting JSON catalogs."""

    def load(self, path: str) -> dict[str, Any]:
        """Return the catalog at path, or an empty mapping if it is missing or invalid."""
        ...

    def save(self, path: str, catalog: dict[str, Any]) -> None:
        """Write the catalog as pretty-printed JSON. Raises CatalogWriteError."""
        ...
