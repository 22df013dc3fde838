"""Configuration for the migration orchestrator."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from i18n_extractor.domain.constants import (
    DEFAULT_WARNING_MESSAGE,
    ENV_DISABLE_SOURCE_REPLACEMENT,
    ENV_WARNING_MESSAGE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationConfig:
    """Settings consumed by MigrateFileUseCase. The extraction engine itself takes none."""

    replace_source: bool = True
    warning_message: str = DEFAULT_WARNING_MESSAGE

    def with_overrides(
        self,
        replace_source: Optional[bool] = None,
        warning_message: Optional[str] = None,
    ) -> "MigrationConfig":
        """Return a copy with the given non-None values applied."""
        changes: dict[str, object] = {}
        if replace_source is not None:
            changes["replace_source"] = replace_source
        if warning_message is not None:
            changes["warning_message"] = warning_message
        return dataclasses.replace(self, **changes)


class ConfigurationLoader:
    """
    Layer configuration sources into a MigrationConfig.

    Precedence, lowest first: defaults, the ``[tool.i18n-extractor]`` table
    (already read from disk by the infrastructure layer), then environment
    variables. Command-line flags are applied afterwards with
    ``MigrationConfig.with_overrides``.
    """

    _FIELD_TYPES: dict[str, type] = {
        "replace_source": bool,
        "warning_message": str,
    }

    def __init__(
        self,
        config_dict: Optional[Mapping[str, object]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._config = dict(config_dict or {})
        self._environ = dict(environ or {})

    def load(self) -> MigrationConfig:
        values: dict[str, object] = {}
        for key, value in self._config.items():
            key = key.replace("-", "_")
            expected = self._FIELD_TYPES.get(key)
            if expected is None:
                logger.warning("Configuration Warning: unknown key '%s' ignored.", key)
                continue
            if not isinstance(value, expected):
                logger.warning(
                    "Configuration Warning: '%s' must be %s, got %r; ignored.",
                    key,
                    expected.__name__,
                    value,
                )
                continue
            values[key] = value

        if self._environ.get(ENV_DISABLE_SOURCE_REPLACEMENT) == "true":
            values["replace_source"] = False
        env_warning = self._environ.get(ENV_WARNING_MESSAGE)
        if env_warning:
            values["warning_message"] = env_warning

        return MigrationConfig(**values)  # type: ignore[arg-type]
