"""Deep merge of extracted data into an existing catalog."""

from typing import Any, Mapping


class CatalogMerger:
    """
    Object sub-trees merge recursively; everything else is replaced.

    Lists are never concatenated: an incoming list overwrites the existing
    value in full. Keys only present in ``existing`` survive unchanged.
    Neither argument is mutated; the caller must use the returned mapping.
    """

    @staticmethod
    def is_mapping(value: Any) -> bool:
        return isinstance(value, Mapping)

    def merge(self, existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
        merged: dict[str, Any] = dict(existing)
        for key, incoming_value in incoming.items():
            current = merged.get(key)
            if self.is_mapping(current) and self.is_mapping(incoming_value):
                merged[key] = self.merge(current, incoming_value)
            elif self.is_mapping(incoming_value):
                merged[key] = self.merge({}, incoming_value)
            else:
                merged[key] = incoming_value
        return merged


def merge_deep(existing: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Module-level shortcut for ``CatalogMerger().merge``."""
    return CatalogMerger().merge(existing, incoming)
