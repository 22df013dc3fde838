"""Recover translation keys from ``useTranslations`` / ``t(...)`` call sites."""

from typing import Iterator, Optional

from i18n_extractor.domain.constants import (
    NAMESPACE_SEPARATOR,
    TRANSLATION_FUNCTION,
    TRANSLATION_HOOK,
)
from i18n_extractor.domain.entities import TranslationEntry
from i18n_extractor.domain.syntax import (
    CallExpression,
    Identifier,
    LogicalOr,
    Node,
    StringLiteral,
    walk,
)


class CallSiteExtractor:
    """
    Two passes over one file's tree.

    The namespace pass keeps the first-argument string of the last
    ``useTranslations('<ns>')`` call visited. The call pass turns every
    ``t('<key>')`` into an entry keyed ``<ns>.<key>`` (or ``<key>`` with no
    namespace), taking ``'<text>'`` from ``t('<key>') || '<text>'`` as the
    default. Calls are matched by callee name only; no binding analysis.
    """

    def extract(self, root: Node) -> dict[str, str]:
        """Return a flat ``full key -> default text`` mapping; later duplicates overwrite earlier ones."""
        namespace = self.find_namespace(root)
        result: dict[str, str] = {}
        for entry in self.iter_entries(root, namespace):
            result[entry.full_key] = entry.default_text
        return result

    def find_namespace(self, root: Node) -> Optional[str]:
        namespace: Optional[str] = None
        for call, _parent in self._calls_named(root, TRANSLATION_HOOK):
            namespace = self._first_string_argument(call)
        return namespace

    def iter_entries(self, root: Node, namespace: Optional[str]) -> Iterator[TranslationEntry]:
        for call, parent in self._calls_named(root, TRANSLATION_FUNCTION):
            yield TranslationEntry.create(
                self._first_string_argument(call) or "",
                namespace=namespace,
                default_text=self._default_text(call, parent),
                separator=NAMESPACE_SEPARATOR,
            )

    def _calls_named(
        self, root: Node, name: str
    ) -> Iterator[tuple[CallExpression, Optional[Node]]]:
        for node, parent in walk(root):
            if not isinstance(node, CallExpression):
                continue
            callee = node.callee
            if not isinstance(callee, Identifier) or callee.name != name:
                continue
            if self._first_string_argument(node) is None:
                continue
            yield node, parent

    @staticmethod
    def _first_string_argument(call: CallExpression) -> Optional[str]:
        if call.arguments and isinstance(call.arguments[0], StringLiteral):
            return call.arguments[0].value
        return None

    @staticmethod
    def _default_text(call: CallExpression, parent: Optional[Node]) -> str:
        if (
            isinstance(parent, LogicalOr)
            and parent.left is call
            and isinstance(parent.right, StringLiteral)
        ):
            return parent.right.value
        return ""
