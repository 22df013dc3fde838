"""Extraction engine: one parse, call sites first, default export as fallback."""

from typing import Optional

from i18n_extractor.domain.call_sites import CallSiteExtractor
from i18n_extractor.domain.errors import ExtractionDepthError
from i18n_extractor.domain.export_locator import ExportLocator
from i18n_extractor.domain.normalizer import ExtractedValue, ValueNormalizer
from i18n_extractor.domain.protocols import ParserGatewayProtocol
from i18n_extractor.domain.syntax import Program


class ExtractionEngine:
    """
    Pick one extraction strategy per file.

    Translation call sites win whenever they yield at least one key; the
    default export is only consulted otherwise, and only a mapping result is
    accepted from it. The engine takes no configuration.
    """

    def __init__(
        self,
        parser: Optional[ParserGatewayProtocol] = None,
        normalizer: Optional[ValueNormalizer] = None,
        export_locator: Optional[ExportLocator] = None,
        call_site_extractor: Optional[CallSiteExtractor] = None,
    ) -> None:
        self.parser = parser
        self.normalizer = normalizer or ValueNormalizer()
        self.export_locator = export_locator or ExportLocator()
        self.call_site_extractor = call_site_extractor or CallSiteExtractor()

    def extract(self, program: Program) -> dict[str, ExtractedValue]:
        """Return the extracted mapping for an already parsed program (empty if nothing qualifies)."""
        translations = self.call_site_extractor.extract(program)
        if translations:
            return dict(translations)
        candidate = self.export_locator.locate(program)
        if candidate is None:
            return {}
        value = self.normalizer.normalize(candidate)
        if not isinstance(value, dict):
            return {}
        return value

    def extract_source(self, source: str, file_name: str) -> dict[str, ExtractedValue]:
        """Parse ``source`` once and extract from it. Parse errors propagate."""
        if self.parser is None:
            raise ValueError("ExtractionEngine.extract_source requires a parser gateway.")
        program = self.parser.parse_source(source, file_name)
        try:
            return self.extract(program)
        except RecursionError as e:
            # Normalization recurses once per nesting level of the exported value.
            raise ExtractionDepthError(file_name) from e
