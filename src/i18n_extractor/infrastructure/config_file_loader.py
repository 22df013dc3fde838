"""Load [tool.i18n-extractor] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

from i18n_extractor.domain.constants import PYPROJECT_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from the start directory.
    """

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> dict[str, object]:
        """Return the [tool.i18n-extractor] table, or {} when no pyproject.toml defines it."""
        current_path = (start or Path.cwd()).resolve()
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = toml_lib.load(f)
                    tool_section = data.get("tool", {}) or {}
                    section = tool_section.get(PYPROJECT_SECTION, {}) or {}
                    if isinstance(section, dict) and section:
                        return section
                except (OSError, toml_lib.TOMLDecodeError):
                    # Keep looking in parent dirs
                    pass
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent
