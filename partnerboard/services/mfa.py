"""
Email-based MFA code issuance.

Flow of issue_mfa_code():
1. The authenticated user may only request a code for themselves (403 otherwise)
2. A 6-digit numeric code is generated from a CSPRNG
3. The code is stored on the user's user_mfa_settings row with a 10 minute
   expiry and the attempt counter reset to 0
4. The code is emailed over SMTP. Missing SMTP credentials are not an error:
   the code stays stored and the response carries a warning

Table layout (user_mfa_settings):
    user_id               text/uuid   primary key
    email_code            text
    email_code_expires_at timestamptz
    email_code_attempts   integer
"""

import asyncio
import logging
import secrets
import smtplib
from datetime import datetime, timedelta, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Callable, Optional

import asyncpg
from asyncpg import Connection

from partnerboard.core.config import Settings, get_settings
from partnerboard.models.schemas import AuthenticatedUser, MfaCodeResponse
from partnerboard.services.errors import (
    ForbiddenError,
    MfaDeliveryError,
    MfaStorageError,
)


logger = logging.getLogger(__name__)

CODE_MIN = 100000
CODE_MAX = 999999

SMTP_MISSING_WARNING = "Email rendszer nincs beállítva, de a kód generálva."

STORE_CODE_QUERY = """
    UPDATE user_mfa_settings
    SET email_code = $1,
        email_code_expires_at = $2,
        email_code_attempts = 0
    WHERE user_id = $3
"""


def generate_code() -> str:
    """Return a 6-digit numeric code (100000-999999)."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


async def store_code(
    conn: Connection,
    user_id: str,
    code: str,
    ttl_minutes: int = 10,
    now: Optional[datetime] = None,
) -> datetime:
    """
    Persist a code on the user's MFA settings row.

    Returns:
        The expiry timestamp written.

    Raises:
        MfaStorageError: The update failed or matched no row.
    """
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=ttl_minutes)

    try:
        status = await conn.execute(STORE_CODE_QUERY, code, expires_at, user_id)
    except (asyncpg.PostgresError, OSError) as e:
        logger.error(f"Failed to store MFA code for user_id={user_id}: {e}", exc_info=True)
        raise MfaStorageError("Nem sikerült menteni a kódot.") from e

    # asyncpg returns e.g. 'UPDATE 1'
    if not status or status.split()[-1] == "0":
        logger.error(f"No user_mfa_settings row for user_id={user_id}")
        raise MfaStorageError("Nem sikerült menteni a kódot.")

    return expires_at


def build_code_email(sender: str, recipient: str, code: str, ttl_minutes: int = 10) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = "Umbroll MFA Kód"
    msg["From"] = sender
    msg["To"] = recipient
    msg.attach(MIMEText(f"A belépési kódod: {code}", "plain", "utf-8"))
    msg.attach(MIMEText(
        f"<h2>Belépési kód: {code}</h2><p>{ttl_minutes} percig érvényes.</p>",
        "html",
        "utf-8",
    ))
    return msg


def send_code_email(recipient: str, code: str, settings: Settings) -> None:
    """
    Deliver a code over SMTP.

    Raises:
        smtplib.SMTPException / OSError: Delivery failed.
    """
    msg = build_code_email(settings.mfa_sender, recipient, code, settings.mfa_code_ttl_minutes)

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as server:
        if settings.smtp_use_tls:
            server.starttls()
        server.login(settings.smtp_user, settings.smtp_password)
        server.send_message(msg)


def ensure_own_user(user: AuthenticatedUser, requested_user_id: str) -> None:
    """Raise ForbiddenError unless the code is requested for the caller."""
    if requested_user_id != user.id:
        logger.warning(f"MFA code requested for user_id={requested_user_id} by user_id={user.id}")
        raise ForbiddenError("Nincs jogosultságod ehhez a művelethez.")


async def issue_mfa_code(
    conn: Connection,
    user: AuthenticatedUser,
    requested_user_id: str,
    settings: Optional[Settings] = None,
    sender: Callable[[str, str, Settings], None] = send_code_email,
) -> MfaCodeResponse:
    """
    Issue, store and deliver an MFA code for the authenticated user.

    Args:
        conn: Database connection for the user_mfa_settings update.
        user: User resolved from the bearer token.
        requested_user_id: userId from the request body.
        settings: Settings holding SMTP configuration.
        sender: Delivery function (replaceable in tests).

    Returns:
        MfaCodeResponse; ``warning`` is set when SMTP is not configured.

    Raises:
        ForbiddenError: requested_user_id is not the authenticated user.
        MfaStorageError: The code could not be stored.
        MfaDeliveryError: The email could not be sent.
    """
    settings = settings or get_settings()
    ensure_own_user(user, requested_user_id)

    code = generate_code()
    await store_code(conn, user.id, code, settings.mfa_code_ttl_minutes)

    if not settings.smtp_configured:
        logger.warning("SMTP_USER or SMTP_PASSWORD missing; MFA code stored but not emailed")
        return MfaCodeResponse(success=True, warning=SMTP_MISSING_WARNING)

    if not user.email:
        raise MfaDeliveryError("A felhasználóhoz nem tartozik email cím.")

    try:
        await asyncio.to_thread(sender, user.email, code, settings)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"MFA email delivery failed for user_id={user.id}: {e}", exc_info=True)
        raise MfaDeliveryError("Nem sikerült elküldeni a kódot.") from e

    logger.info(f"MFA code issued for user_id={user.id}")
    return MfaCodeResponse(success=True)
