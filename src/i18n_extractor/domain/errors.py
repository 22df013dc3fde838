"""Exceptions raised by gateways and surfaced by the migration use case."""


class I18nExtractorError(Exception):
    """Base class for every failure the extractor reports."""


class SourceReadError(I18nExtractorError):
    """The source file could not be read."""


class SourceParseError(I18nExtractorError):
    """The source file is not structurally valid ECMAScript/TypeScript."""

    def __init__(self, file_name: str, line: int, column: int, detail: str) -> None:
        self.file_name = file_name
        self.line = line
        self.column = column
        self.detail = detail
        super().__init__(f"{file_name}:{line}:{column}: {detail}")


class CatalogWriteError(I18nExtractorError):
    """The merged catalog could not be written."""


class SourceRewriteError(I18nExtractorError):
    """The migration marker could not be written over the source file."""


class ExtractionDepthError(I18nExtractorError):
    """The extracted value is nested too deeply to convert."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"{file_name}: values are nested too deeply to extract")
