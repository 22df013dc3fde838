"""Tree-sitter Gateway - Infrastructure implementation of ParserGatewayProtocol."""

import html
import logging
import math
from pathlib import PurePath
from typing import Callable, Optional, Union, cast

import tree_sitter_typescript
from tree_sitter import Language, Node as TSNode, Parser

from i18n_extractor.domain.constants import TYPESCRIPT_SUFFIXES
from i18n_extractor.domain.errors import SourceParseError
from i18n_extractor.domain.protocols import ParserGatewayProtocol
from i18n_extractor.domain.syntax import (
    ArrayLiteral,
    BooleanLiteral,
    CallExpression,
    ExportDefault,
    Identifier,
    LogicalOr,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectLiteral,
    Program,
    Property,
    StringLiteral,
    TemplateLiteral,
    Unhandled,
    VariableDeclarator,
    VoidExpression,
)

logger = logging.getLogger(__name__)

_COMMENT_TYPES = frozenset({"comment", "html_comment"})

# Older grammars wrap ``?.`` in an optional_chain node; newer ones emit the bare token.
_OPTIONAL_CALL_TYPES = frozenset({"optional_chain", "?."})

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LINE_TERMINATORS = ("\r\n", "\n", "\r", "\u2028", "\u2029")

_MAX_CODE_POINT = 0x10FFFF

# Children to lower first, and how to build the domain node from their results.
_Plan = tuple[list[TSNode], Callable[[list[Node]], Node]]


class _InvalidLiteral(Exception):
    """A literal tree-sitter accepts but that has no valid value."""

    def __init__(self, node: TSNode, detail: str) -> None:
        self.node = node
        self.detail = detail
        super().__init__(detail)


def _leaf(value: Node) -> _Plan:
    return [], lambda _converted: value


class TreeSitterGateway(ParserGatewayProtocol):
    """
    Parses JavaScript/TypeScript (with JSX) and lowers it to the domain syntax model.

    ``.ts``/``.mts``/``.cts`` files use the TypeScript grammar so that
    ``<T>value`` assertions parse; everything else uses the TSX grammar.
    Lowering runs bottom-up on an explicit stack, so long operator chains
    and deeply nested literals do not hit the interpreter's recursion limit.
    """

    def __init__(self) -> None:
        self._languages: dict[str, Language] = {
            "typescript": Language(tree_sitter_typescript.language_typescript()),
            "tsx": Language(tree_sitter_typescript.language_tsx()),
        }

    def grammar_for(self, file_name: str) -> str:
        """Return the grammar name used for ``file_name``."""
        if PurePath(file_name).suffix.lower() in TYPESCRIPT_SUFFIXES:
            return "typescript"
        return "tsx"

    def parse_source(self, source: str, file_name: str) -> Program:
        """Parse ``source`` and return its Program node. Raises SourceParseError on any syntax error."""
        grammar = self.grammar_for(file_name)
        parser = Parser(self._languages[grammar])
        tree = parser.parse(source.lstrip("\ufeff").encode("utf-8"))
        root = tree.root_node
        if root.has_error:
            problem = self._first_problem(root)
            target = problem or root
            detail = (
                f"missing {target.type}"
                if problem is not None and problem.is_missing
                else "unexpected syntax"
            )
            raise self._parse_error(file_name, target, detail)
        try:
            program = self._convert(root)
        except _InvalidLiteral as e:
            raise self._parse_error(file_name, e.node, e.detail) from e
        logger.debug("Parsed %s with the %s grammar", file_name, grammar)
        return cast(Program, program)

    @staticmethod
    def _parse_error(file_name: str, node: TSNode, detail: str) -> SourceParseError:
        return SourceParseError(
            file_name,
            node.start_point[0] + 1,
            node.start_point[1] + 1,
            detail,
        )

    @staticmethod
    def _first_problem(node: TSNode) -> Optional[TSNode]:
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "ERROR" or current.is_missing:
                return current
            suspects = [c for c in current.children if c.has_error or c.is_missing]
            stack.extend(reversed(suspects))
        return None

    @staticmethod
    def _named(node: TSNode) -> list[TSNode]:
        return [child for child in node.named_children if child.type not in _COMMENT_TYPES]

    @staticmethod
    def _text(node: TSNode) -> str:
        return (node.text or b"").decode("utf-8")

    def _convert(self, node: TSNode) -> Node:
        """Lower ``node`` and its subtree without recursing."""
        children, build = self._plan(node)
        # Each frame: pending children, builder, results gathered so far.
        stack: list[tuple[list[TSNode], Callable[[list[Node]], Node], list[Node]]] = [
            (children, build, [])
        ]
        while True:
            children, build, converted = stack[-1]
            if len(converted) < len(children):
                child_children, child_build = self._plan(children[len(converted)])
                stack.append((child_children, child_build, []))
                continue
            stack.pop()
            result = build(converted)
            if not stack:
                return result
            stack[-1][2].append(result)

    def _plan(self, node: TSNode) -> _Plan:
        kind = node.type
        if kind == "program":
            return self._named(node), lambda c: Program(body=tuple(c))
        if kind == "parenthesized_expression":
            inner = self._named(node)
            if inner:
                return [inner[0]], lambda c: c[0]
        if kind == "string":
            return _leaf(StringLiteral(self._string_value(node)))
        if kind == "template_string":
            return self._template(node)
        if kind == "number":
            return _leaf(self._number(node))
        if kind in ("true", "false"):
            return _leaf(BooleanLiteral(kind == "true"))
        if kind == "null":
            return _leaf(NullLiteral())
        if kind == "undefined":
            return _leaf(Identifier("undefined"))
        if kind == "identifier":
            return _leaf(Identifier(self._text(node)))
        if kind == "unary_expression":
            return self._unary(node)
        if kind == "object":
            return self._named(node), lambda c: ObjectLiteral(
                tuple(cast(Union[Property, Unhandled], member) for member in c)
            )
        if kind == "pair":
            return self._pair(node)
        if kind == "shorthand_property_identifier":
            name = self._text(node)
            return _leaf(Property(name, Identifier(name)))
        if kind == "array":
            return self._array(node)
        if kind == "call_expression":
            return self._call(node)
        if kind == "binary_expression":
            return self._binary(node)
        if kind == "export_statement":
            return self._export(node)
        if kind == "variable_declarator":
            return self._declarator(node)
        return self._unhandled(node)

    def _unhandled(self, node: TSNode) -> _Plan:
        kind = node.type
        return self._named(node), lambda c: Unhandled(kind, tuple(c))

    def _string_value(self, node: TSNode) -> str:
        parts: list[str] = []
        for child in node.children:
            if child.type == "string_fragment":
                parts.append(self._text(child))
            elif child.type == "escape_sequence":
                try:
                    parts.append(decode_escape(self._text(child)))
                except ValueError as e:
                    raise _InvalidLiteral(child, f"invalid escape sequence: {e}") from e
            elif child.type == "html_character_reference":
                parts.append(html.unescape(self._text(child)))
        return join_utf16("".join(parts))

    def _template(self, node: TSNode) -> _Plan:
        raw = node.text or b""
        base = node.start_byte
        quasis: list[str] = []
        expressions: list[TSNode] = []
        segment_start = 1
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            quasis.append(raw[segment_start:child.start_byte - base].decode("utf-8"))
            segment_start = child.end_byte - base
            inner = self._named(child)
            if inner:
                expressions.append(inner[0])
        quasis.append(raw[segment_start:len(raw) - 1].decode("utf-8"))
        cooked = tuple(q.replace("\r\n", "\n").replace("\r", "\n") for q in quasis)
        return expressions, lambda c: TemplateLiteral(quasis=cooked, expressions=tuple(c))

    def _number(self, node: TSNode) -> Union[NumericLiteral, Unhandled]:
        value = parse_number(self._text(node))
        if value is None:
            return Unhandled("number")
        return NumericLiteral(value)

    def _unary(self, node: TSNode) -> _Plan:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is not None and operator.type == "void" and argument is not None:
            return [argument], lambda c: VoidExpression(c[0])
        return self._unhandled(node)

    def _pair(self, node: TSNode) -> _Plan:
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if key is None or value is None:
            return self._unhandled(node)
        if key.type == "property_identifier":
            name = self._text(key)
            return [value], lambda c: Property(name, c[0])
        if key.type == "string":
            name = self._string_value(key)
            return [value], lambda c: Property(name, c[0])
        # Computed and numeric keys stay reachable for call-site scanning only.
        return [value], lambda c: Unhandled("pair", (c[0],))

    def _array(self, node: TSNode) -> _Plan:
        layout: list[Optional[TSNode]] = []
        seen_element = False
        for child in node.children:
            if child.type in ("[", "]") or child.type in _COMMENT_TYPES:
                continue
            if child.type == ",":
                if not seen_element:
                    layout.append(None)
                seen_element = False
                continue
            layout.append(child)
            seen_element = True
        present = [child for child in layout if child is not None]

        def build(converted: list[Node]) -> Node:
            values = iter(converted)
            return ArrayLiteral(tuple(None if child is None else next(values) for child in layout))

        return present, build

    def _call(self, node: TSNode) -> _Plan:
        callee = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        optional = any(child.type in _OPTIONAL_CALL_TYPES for child in node.children)
        if callee is None or arguments is None or arguments.type != "arguments" or optional:
            # Tagged templates and optional calls are not plain calls.
            return self._unhandled(node)
        return [callee, *self._named(arguments)], lambda c: CallExpression(
            callee=c[0], arguments=tuple(c[1:])
        )

    def _binary(self, node: TSNode) -> _Plan:
        operator = node.child_by_field_name("operator")
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if operator is not None and operator.type == "||" and left is not None and right is not None:
            return [left, right], lambda c: LogicalOr(c[0], c[1])
        return self._unhandled(node)

    def _export(self, node: TSNode) -> _Plan:
        if not any(child.type == "default" for child in node.children):
            return self._unhandled(node)
        exported = node.child_by_field_name("value") or node.child_by_field_name("declaration")
        if exported is None:
            return self._unhandled(node)
        return [exported], lambda c: ExportDefault(c[0])

    def _declarator(self, node: TSNode) -> _Plan:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name is None or name.type != "identifier":
            return self._unhandled(node)
        binding = self._text(name)
        if value is None:
            return _leaf(VariableDeclarator(name=binding, init=None))
        return [value], lambda c: VariableDeclarator(name=binding, init=c[0])


def decode_escape(sequence: str) -> str:
    """
    Decode one ECMAScript string escape such as ``\\n``, ``\\x41`` or ``\\u{1F600}``.

    Raises ValueError for a ``\\u{...}`` escape that is empty, not hex, or
    above U+10FFFF.
    """
    body = sequence[1:]
    if not body:
        return ""
    if body.startswith(_LINE_TERMINATORS):
        return ""
    if body.startswith("u{") and body.endswith("}"):
        digits = body[2:-1]
        try:
            code_point = int(digits, 16)
        except ValueError:
            raise ValueError(f"{sequence} is not a hexadecimal code point") from None
        if code_point > _MAX_CODE_POINT:
            raise ValueError(f"{sequence} is above U+10FFFF")
        return chr(code_point)
    if body[0] in ("u", "x") and len(body) > 1:
        try:
            return chr(int(body[1:], 16))
        except ValueError:
            return body
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.isdigit() and all(digit in "01234567" for digit in body):
        return chr(int(body, 8))
    return body


def join_utf16(value: str) -> str:
    """Combine surrogate pairs produced by ``\\uD83D\\uDE00`` style escapes."""
    if not any("\ud800" <= char <= "\udfff" for char in value):
        return value
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def parse_number(text: str) -> Optional[Union[int, float]]:
    """
    Parse an ECMAScript numeric literal.

    Integral values come back as ``int`` (JSON has one number type); BigInt
    literals and values that overflow to infinity return None.
    """
    cleaned = text.replace("_", "")
    lowered = cleaned.lower()
    if lowered.endswith("n"):
        return None
    try:
        if lowered.startswith("0x"):
            return int(lowered[2:], 16)
        if lowered.startswith("0o"):
            return int(lowered[2:], 8)
        if lowered.startswith("0b"):
            return int(lowered[2:], 2)
        if len(lowered) > 1 and lowered[0] == "0" and lowered.isdigit():
            if all(digit in "01234567" for digit in lowered):
                return int(lowered, 8)
        value = float(lowered)
    except ValueError:
        return None
    if math.isinf(value) or math.isnan(value):
        return None
    if value.is_integer():
        return int(value)
    return value
