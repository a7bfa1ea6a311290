"""Grant entity - one permission held by one holder in one scope."""

from dataclasses import dataclass

from grantkeeper.domain.value_objects import Holder, Scope


@dataclass(frozen=True)
class Grant:
    """Grant. Set element: (organization, holder, permission, scope) is unique."""

    organization_uuid: str
    holder: Holder
    permission: str
    scope: Scope
