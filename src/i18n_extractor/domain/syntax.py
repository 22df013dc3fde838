"""Closed syntax model for the subset of ECMAScript the extractor understands.

Parser gateways translate their concrete trees into these nodes. Anything the
extractor does not interpret becomes ``Unhandled``, which keeps its children so
that call-site scanning still reaches code nested inside functions, markup or
conditionals.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union


@dataclass(frozen=True)
class StringLiteral:
    """A quoted string; ``value`` is the cooked (escape-decoded) text."""

    value: str


@dataclass(frozen=True)
class TemplateLiteral:
    """A backtick template; ``quasis`` are the raw text segments between interpolations."""

    quasis: tuple[str, ...]
    expressions: tuple["Node", ...] = ()


@dataclass(frozen=True)
class NumericLiteral:
    value: Union[int, float]


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class VoidExpression:
    """``void <argument>``."""

    argument: "Node"


@dataclass(frozen=True)
class Property:
    """An object member ``key: value`` whose key is an identifier or a string literal."""

    key: str
    value: "Node"


@dataclass(frozen=True)
class ObjectLiteral:
    """Members in source order. Spreads, methods and computed keys arrive as ``Unhandled``."""

    properties: tuple[Union[Property, "Unhandled"], ...] = ()


@dataclass(frozen=True)
class ArrayLiteral:
    """Elements in source order. ``None`` marks a hole such as ``[a, , b]``."""

    elements: tuple[Optional["Node"], ...] = ()


@dataclass(frozen=True)
class CallExpression:
    callee: "Node"
    arguments: tuple["Node", ...] = ()


@dataclass(frozen=True)
class LogicalOr:
    """``left || right``."""

    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class VariableDeclarator:
    """``name = init`` inside a ``const``/``let``/``var`` declaration."""

    name: str
    init: Optional["Node"] = None


@dataclass(frozen=True)
class ExportDefault:
    """``export default <declaration>``."""

    declaration: "Node"


@dataclass(frozen=True)
class Unhandled:
    """Any construct outside the interpreted subset."""

    kind: str
    children: tuple["Node", ...] = ()


@dataclass(frozen=True)
class Program:
    body: tuple["Node", ...] = field(default_factory=tuple)


Expression = Union[
    StringLiteral,
    TemplateLiteral,
    NumericLiteral,
    BooleanLiteral,
    NullLiteral,
    Identifier,
    VoidExpression,
    ObjectLiteral,
    ArrayLiteral,
    CallExpression,
    LogicalOr,
]

Node = Union[
    Expression,
    Property,
    VariableDeclarator,
    ExportDefault,
    Unhandled,
    Program,
]


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of ``node`` in source order."""
    if isinstance(node, Program):
        yield from node.body
    elif isinstance(node, TemplateLiteral):
        yield from node.expressions
    elif isinstance(node, VoidExpression):
        yield node.argument
    elif isinstance(node, Property):
        yield node.value
    elif isinstance(node, ObjectLiteral):
        yield from node.properties
    elif isinstance(node, ArrayLiteral):
        yield from (element for element in node.elements if element is not None)
    elif isinstance(node, CallExpression):
        yield node.callee
        yield from node.arguments
    elif isinstance(node, LogicalOr):
        yield node.left
        yield node.right
    elif isinstance(node, VariableDeclarator):
        if node.init is not None:
            yield node.init
    elif isinstance(node, ExportDefault):
        yield node.declaration
    elif isinstance(node, Unhandled):
        yield from node.children


def walk(node: Node, parent: Optional[Node] = None) -> Iterator[tuple[Node, Optional[Node]]]:
    """Depth-first, pre-order traversal yielding ``(node, parent)`` pairs."""
    stack: list[tuple[Node, Optional[Node]]] = [(node, parent)]
    while stack:
        current, current_parent = stack.pop()
        yield current, current_parent
        children = list(iter_children(current))
        for child in reversed(children):
            stack.append((child, current))
