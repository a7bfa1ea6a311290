"""Builds the user session of a request."""

from grantkeeper.infrastructure.session.server_user_session import ServerUserSession


class ServerUserSessionFactory:
    """Creates sessions for a login, or anonymous sessions."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def create(self, login: str | None) -> ServerUserSession:
        """Session of the active user with login; anonymous when unknown or inactive."""
        if not login:
            return ServerUserSession.for_anonymous(self._uow_factory)
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_login(login)
        if user is None or not user.active:
            return ServerUserSession.for_anonymous(self._uow_factory)
        return ServerUserSession.for_user(self._uow_factory, user)
