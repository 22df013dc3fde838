"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
on the import path.
"""

import logging
from typing import Callable, Mapping, Optional

import pytest
import typer

from i18n_extractor.domain.config import ConfigurationLoader
from i18n_extractor.domain.extraction import ExtractionEngine
from i18n_extractor.infrastructure.gateways.catalog_gateway import JsonCatalogStore
from i18n_extractor.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from i18n_extractor.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from i18n_extractor.interface.cli import CLIDependencies, create_app
from i18n_extractor.interface.telemetry import ProjectTelemetry


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handler/level changes made by configure_logging between tests."""
    logger = logging.getLogger("i18n_extractor")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture(scope="session")
def parser_gateway() -> TreeSitterGateway:
    return TreeSitterGateway()


@pytest.fixture
def make_app(parser_gateway: TreeSitterGateway) -> Callable[..., typer.Typer]:
    """Build the CLI app with real gateways and an explicit environment."""

    def _make(
        environ: Optional[Mapping[str, str]] = None,
        config_dict: Optional[Mapping[str, object]] = None,
    ) -> typer.Typer:
        config = ConfigurationLoader(config_dict, environ).load()
        telemetry = ProjectTelemetry("i18n-extract", "cyan", "ready")
        filesystem = FileSystemGateway()
        deps = CLIDependencies(
            config=config,
            telemetry=telemetry,
            engine=ExtractionEngine(parser=parser_gateway),
            filesystem=filesystem,
            catalog_store=JsonCatalogStore(filesystem, telemetry=telemetry),
        )
        return create_app(deps)

    return _make
