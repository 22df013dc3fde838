import os
from typing import TYPE_CHECKING, Any, Optional, cast

from i18n_extractor.domain.config import ConfigurationLoader, MigrationConfig
from i18n_extractor.domain.extraction import ExtractionEngine
from i18n_extractor.infrastructure.config_file_loader import ConfigFileLoader
from i18n_extractor.infrastructure.gateways.catalog_gateway import JsonCatalogStore
from i18n_extractor.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from i18n_extractor.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from i18n_extractor.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from i18n_extractor.domain.protocols import (
        CatalogStoreProtocol,
        FileSystemProtocol,
        ParserGatewayProtocol,
        TelemetryPort,
    )


class ExtractorContainer:
    """Dependency Injection Container for the i18n extractor."""

    _instance: Optional["ExtractorContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict = ConfigFileLoader.load_config_from_fs()
        config = ConfigurationLoader(config_dict, os.environ).load()
        self.register_singleton("MigrationConfig", config)

        telemetry = ProjectTelemetry("i18n-extract", "cyan", "ready")
        self.register_singleton("TelemetryPort", telemetry)

        parser = TreeSitterGateway()
        self.register_singleton("TreeSitterGateway", parser)
        self.register_singleton("ExtractionEngine", ExtractionEngine(parser=parser))

        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton(
            "CatalogStore",
            JsonCatalogStore(filesystem, telemetry=telemetry),
        )

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config(self) -> MigrationConfig:
        """Return the migration configuration (pyproject + environment)."""
        return cast(MigrationConfig, self.get("MigrationConfig"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_parser_gateway(self) -> "ParserGatewayProtocol":
        """Return the tree-sitter parser gateway."""
        return cast("ParserGatewayProtocol", self.get("TreeSitterGateway"))

    def get_extraction_engine(self) -> ExtractionEngine:
        """Return the extraction engine wired to the parser gateway."""
        return cast(ExtractionEngine, self.get("ExtractionEngine"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_catalog_store(self) -> "CatalogStoreProtocol":
        """Return the JSON catalog store."""
        return cast("CatalogStoreProtocol", self.get("CatalogStore"))

    @classmethod
    def get_instance(cls) -> "ExtractorContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = ExtractorContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
