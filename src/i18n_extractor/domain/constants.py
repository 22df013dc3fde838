"""Names and texts shared across layers."""

TRANSLATION_HOOK: str = "useTranslations"
TRANSLATION_FUNCTION: str = "t"
NAMESPACE_SEPARATOR: str = "."
TEMPLATE_PLACEHOLDER: str = "{{}}"
CATALOG_INDENT: int = 2

MIGRATION_MARKER_PREFIX: str = "MIGRATED TO "
DEFAULT_WARNING_MESSAGE: str = (
    "\n\nIMPORTANT: DO NOT READ THE TARGET FILE CONTENT - it contains large data "
    "structures that will consume excessive context window space."
)

# Environment overrides, read only by the configuration loader.
ENV_DISABLE_SOURCE_REPLACEMENT: str = "DISABLE_SOURCE_REPLACEMENT"
ENV_WARNING_MESSAGE: str = "WARNING_MESSAGE"

PYPROJECT_SECTION: str = "i18n-extractor"

TYPESCRIPT_SUFFIXES: frozenset[str] = frozenset({".ts", ".mts", ".cts"})
