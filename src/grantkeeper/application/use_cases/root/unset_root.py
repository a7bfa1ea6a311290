"""Revoke the root flag of a user."""

from grantkeeper.application.ports import UserSession
from grantkeeper.domain.exceptions import ValidationError
from grantkeeper.logging import get_logger

log = get_logger(__name__)


class UnsetRootUseCase:
    """Make a user non-root. Only a root may call it; a non-root login is left as is."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, session: UserSession, login: str | None) -> bool:
        """Return True when the flag was cleared."""
        session.check_is_root()
        if not login:
            raise ValidationError("The 'login' parameter is missing")
        async with self._uow_factory() as uow:
            changed = await uow.users.set_root(login, False)
        if changed:
            log.info("root_unset", login=login, by=session.login)
        return changed
