"""Console + logging telemetry used by the CLI."""

import logging

from rich.console import Console
from rich.markup import escape

from i18n_extractor.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """Prints styled status lines to stderr and mirrors them to the ``i18n_extractor`` logger."""

    def __init__(self, project_name: str, color: str, welcome: str) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome = welcome
        # stderr keeps stdout free for summaries and JSON output.
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger("i18n_extractor")

    def handshake(self) -> None:
        self.console.print(f"[bold {self.color}]{self.project_name}[/] {self.welcome}")
        self.logger.info("%s %s", self.project_name, self.welcome)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/] {escape(message)}")
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/] {escape(message)}")
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]warning:[/] {escape(message)}")
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)


def configure_logging(verbose: bool = False) -> None:
    """Send package log records to stderr only when verbose; the console already shows warnings."""
    logger = logging.getLogger("i18n_extractor")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    if verbose:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.setLevel(logging.DEBUG)
    else:
        handler = logging.NullHandler()
        logger.setLevel(logging.WARNING)
    logger.addHandler(handler)
