"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from i18n_extractor.infrastructure.di.container import ExtractorContainer
from i18n_extractor.interface.cli import CLIDependencies, create_app


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = ExtractorContainer()

    deps = CLIDependencies(
        config=container.get_config(),
        telemetry=container.get_telemetry_port(),
        engine=container.get_extraction_engine(),
        filesystem=container.get_filesystem_gateway(),
        catalog_store=container.get_catalog_store(),
    )

    app = create_app(deps)
    app()


if __name__ == "__main__":
    main()
