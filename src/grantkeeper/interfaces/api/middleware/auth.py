"""Auth middleware - builds the user session of each request."""

import falcon.asgi

from grantkeeper.infrastructure.auth.keycloak_provider import KeycloakProvider
from grantkeeper.infrastructure.session.session_factory import ServerUserSessionFactory


class AuthMiddleware:
    """Validates the bearer token and sets req.context.session.

    No Authorization header gives an anonymous session. A token that cannot be
    validated leaves req.context.session as None.
    """

    def __init__(
        self,
        session_factory: ServerUserSessionFactory,
        keycloak_provider: KeycloakProvider | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract login from Authorization header."""
        auth = req.get_header("Authorization")
        if not auth:
            req.context.session = await self._session_factory.create(None)
            return
        if auth.startswith("Bearer ") and self._keycloak:
            user = await self._keycloak.decode_token(auth[7:])
            if user:
                req.context.session = await self._session_factory.create(user.login)
                return
        req.context.session = None
