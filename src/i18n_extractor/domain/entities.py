from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class TranslationEntry:
    """A translation key recovered from a ``t(...)`` call and its default text."""

    full_key: str
    default_text: str = ""

    @classmethod
    def create(
        cls,
        local_key: str,
        namespace: Optional[str] = None,
        default_text: str = "",
        separator: str = ".",
    ) -> "TranslationEntry":
        """Prefix ``local_key`` with ``namespace`` when one is active (an empty namespace is none)."""
        full_key = f"{namespace}{separator}{local_key}" if namespace else local_key
        return cls(full_key=full_key, default_text=default_text)


class MigrationStatus(Enum):
    """Outcome of migrating one source file."""
    SUCCESS = "success"
    NO_DATA = "no_data"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class MigrationResult:
    """What one migration did, with the human-readable summary."""
    status: MigrationStatus
    message: str
    source_path: str
    target_path: str
    entries_merged: int = 0
    catalog_written: bool = False
    source_replaced: bool = False

    @property
    def ok(self) -> bool:
        """True when nothing failed (including the no-data outcome)."""
        return self.status in (MigrationStatus.SUCCESS, MigrationStatus.NO_DATA)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "message": self.message,
            "source_path": self.source_path,
            "target_path": self.target_path,
            "entries_merged": self.entries_merged,
            "catalog_written": self.catalog_written,
            "source_replaced": self.source_replaced,
        }
