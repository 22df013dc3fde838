"""Convert syntax nodes into JSON-compatible values."""

from typing import Optional, Union

from i18n_extractor.domain.constants import TEMPLATE_PLACEHOLDER
from i18n_extractor.domain.syntax import (
    ArrayLiteral,
    BooleanLiteral,
    Identifier,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectLiteral,
    Property,
    StringLiteral,
    TemplateLiteral,
    VoidExpression,
)

ExtractedValue = Union[
    str, int, float, bool, None, list["ExtractedValue"], dict[str, "ExtractedValue"]
]


class ValueNormalizer:
    """
    Total, pure conversion of a node into an extracted value.

    Unknown node kinds become ``None``; nothing here raises.
    """

    def normalize(self, node: Optional[Node]) -> ExtractedValue:
        """Return the JSON-compatible value of ``node`` (``None`` for holes and unknown kinds)."""
        if node is None:
            return None
        if isinstance(node, StringLiteral):
            return node.value
        if isinstance(node, TemplateLiteral):
            return TEMPLATE_PLACEHOLDER.join(node.quasis)
        if isinstance(node, (NumericLiteral, BooleanLiteral)):
            return node.value
        if isinstance(node, NullLiteral):
            return None
        if self.is_undefined_like(node):
            return None
        if isinstance(node, ObjectLiteral):
            return self.normalize_object(node)
        if isinstance(node, ArrayLiteral):
            return [self.normalize(element) for element in node.elements]
        return None

    def normalize_object(self, node: ObjectLiteral) -> dict[str, ExtractedValue]:
        """Normalize every identifier/string-keyed property; other members are skipped."""
        result: dict[str, ExtractedValue] = {}
        for member in node.properties:
            if isinstance(member, Property):
                result[member.key] = self.normalize(member.value)
        return result

    @staticmethod
    def is_undefined_like(node: Node) -> bool:
        """True for ``undefined`` and ``void 0``, the two spellings of an undefined value."""
        if isinstance(node, Identifier):
            return node.name == "undefined"
        if isinstance(node, VoidExpression):
            argument = node.argument
            return isinstance(argument, NumericLiteral) and argument.value == 0
        return False
