"""Keycloak OIDC provider for token validation."""

from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from grantkeeper.logging import get_logger

log = get_logger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token. login is the preferred_username claim."""

    subject: str
    login: str
    email: str | None


class KeycloakProvider:
    """Keycloak OIDC - introspects bearer tokens and extracts the login."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    async def decode_token(self, token: str) -> OIDCUser | None:
        """Validate token, return user info or None when inactive or rejected."""
        try:
            token_info = await self._keycloak.a_introspect(token)
        except KeycloakError as e:
            log.warning("token_introspection_failed", error=str(e))
            return None
        if not token_info.get("active"):
            return None
        login = token_info.get("preferred_username")
        if not login:
            return None
        return OIDCUser(
            subject=token_info.get("sub", ""),
            login=login,
            email=token_info.get("email"),
        )
