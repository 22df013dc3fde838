"""Find the object a module exposes through ``export default``."""

from typing import Optional

from i18n_extractor.domain.syntax import (
    ExportDefault,
    Identifier,
    Node,
    ObjectLiteral,
    Program,
    Unhandled,
    VariableDeclarator,
)


class SymbolTable:
    """
    Top-level bindings of one file, name -> initializer.

    Built in a single pass over the program body, including declarations
    wrapped in ``export const``. Only the first declarator of a name is
    recorded. Nested scopes and imports are never consulted.
    """

    def __init__(self, bindings: dict[str, Optional[Node]]) -> None:
        self._bindings = bindings

    @classmethod
    def from_program(cls, program: Program) -> "SymbolTable":
        bindings: dict[str, Optional[Node]] = {}
        for statement in program.body:
            for declarator in cls._declarators(statement):
                bindings.setdefault(declarator.name, declarator.init)
        return cls(bindings)

    @staticmethod
    def _declarators(statement: Node) -> list[VariableDeclarator]:
        if isinstance(statement, VariableDeclarator):
            return [statement]
        if isinstance(statement, Unhandled) and statement.kind in (
            "lexical_declaration",
            "variable_declaration",
            "export_statement",
        ):
            found: list[VariableDeclarator] = []
            for child in statement.children:
                found.extend(SymbolTable._declarators(child))
            return found
        return []

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def resolve(self, name: str) -> Optional[Node]:
        """Return the initializer bound to ``name``, or None if unbound or uninitialized."""
        return self._bindings.get(name)


class ExportLocator:
    """Locate the candidate node behind the first top-level default export."""

    def locate(self, program: Program) -> Optional[ObjectLiteral]:
        """
        Return the exported object literal, or None.

        ``export default {...}`` yields the literal directly. ``export default
        name`` resolves ``name`` through the file's top-level bindings and
        yields its initializer when that is an object literal. Only the first
        default export is considered.
        """
        export = self._first_default_export(program)
        if export is None:
            return None
        declaration = export.declaration
        if isinstance(declaration, ObjectLiteral):
            return declaration
        if isinstance(declaration, Identifier):
            initializer = SymbolTable.from_program(program).resolve(declaration.name)
            if isinstance(initializer, ObjectLiteral):
                return initializer
        return None

    @staticmethod
    def _first_default_export(program: Program) -> Optional[ExportDefault]:
        for statement in program.body:
            if isinstance(statement, ExportDefault):
                return statement
        return None
