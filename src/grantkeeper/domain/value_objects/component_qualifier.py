"""Component qualifiers."""

from enum import StrEnum


class Qualifier(StrEnum):
    """Kind of component in the project tree."""

    PROJECT = "TRK"
    VIEW = "VW"
    MODULE = "BRC"
    DIRECTORY = "DIR"
    FILE = "FIL"
    UNIT_TEST_FILE = "UTS"


# Qualifiers that can carry project permissions.
PERMISSION_ROOT_QUALIFIERS = frozenset({Qualifier.PROJECT, Qualifier.VIEW})
