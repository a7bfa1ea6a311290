"""Request helpers shared by API resources."""

from typing import Any

import falcon.asgi

from grantkeeper.application.ports import UserSession
from grantkeeper.domain.exceptions import Unauthorized, ValidationError


def require_session(req: falcon.asgi.Request) -> UserSession:
    """Session set by AuthMiddleware. None means the token was rejected."""
    session = getattr(req.context, "session", None)
    if session is None:
        raise Unauthorized("Invalid authentication token")
    return session


async def read_body(req: falcon.asgi.Request) -> dict[str, Any]:
    body = await req.get_media(default_when_empty={})
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def mandatory(body: dict[str, Any], name: str) -> str:
    value = body.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"The '{name}' parameter is missing")
    return str(value)


def optional_str(body: dict[str, Any], name: str) -> str | None:
    value = body.get(name)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def optional_int(body: dict[str, Any], name: str) -> int | None:
    value = body.get(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"The '{name}' parameter must be an integer") from None
