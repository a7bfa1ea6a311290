"""Outcome of a permission change."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Unchanged:
    """Grant was already in the requested state; nothing written."""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Applied:
    """Grant inserted or deleted."""

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Change refused by a safety rule; nothing written."""

    reason: str

    def __bool__(self) -> bool:
        return False


ChangeResult = Unchanged | Applied | Rejected

UNCHANGED = Unchanged()
APPLIED = Applied()
