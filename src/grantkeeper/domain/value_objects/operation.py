"""Permission change operation."""

from enum import StrEnum


class Operation(StrEnum):
    """Kind of mutation applied to a grant."""

    ADD = "add"
    REMOVE = "remove"
