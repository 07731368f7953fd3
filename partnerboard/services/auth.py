"""
Bearer token resolution against the auth server.

The dashboard does not verify tokens itself. The caller's ``Authorization``
header is forwarded, together with the public API key, to the auth server's
``/auth/v1/user`` endpoint, which answers with the user the token belongs to.
"""

import logging
from typing import Optional

import requests

from partnerboard.core.config import Settings, get_settings
from partnerboard.models.schemas import AuthenticatedUser
from partnerboard.services.errors import AuthenticationError, PartnerboardError


logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
USER_ENDPOINT = "/auth/v1/user"
AUTH_TIMEOUT_SECONDS = 10


def resolve_user(
    authorization: Optional[str],
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> AuthenticatedUser:
    """
    Resolve the user behind an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw Authorization header value.
        settings: Settings holding the auth server URL and API key.
        session: requests.Session to use (module-level requests if omitted).

    Returns:
        AuthenticatedUser with the user's id and email.

    Raises:
        AuthenticationError: Header missing/malformed, or the token is rejected.
        PartnerboardError: The auth server is not configured.
    """
    settings = settings or get_settings()

    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("Hiányzó vagy hibás Authorization header")

    if not settings.supabase_url or not settings.supabase_anon_key:
        raise PartnerboardError("Auth server configuration missing (SUPABASE_URL or SUPABASE_ANON_KEY)")

    http = session or requests
    url = settings.supabase_url.rstrip("/") + USER_ENDPOINT

    try:
        response = http.get(
            url,
            headers={
                "Authorization": authorization,
                "apikey": settings.supabase_anon_key,
            },
            timeout=AUTH_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.warning(f"Auth server unreachable: {e}")
        raise AuthenticationError("A felhasználó nem azonosítható.") from e

    if not response.ok:
        logger.info(f"Auth server rejected token with HTTP {response.status_code}")
        raise AuthenticationError("A felhasználó nem azonosítható.")

    try:
        body = response.json()
    except ValueError as e:
        raise AuthenticationError("A felhasználó nem azonosítható.") from e

    if not isinstance(body, dict) or not body.get("id"):
        raise AuthenticationError("A felhasználó nem azonosítható.")

    return AuthenticatedUser(id=str(body["id"]), email=body.get("email"))
