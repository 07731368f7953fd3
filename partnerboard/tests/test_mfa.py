"""
Test Module for Email MFA Code Issuance.

Validates:
- Codes are 6-digit numeric strings
- Storage writes the code, a 10 minute expiry and resets the attempt counter
- Storage failures and missing rows raise MfaStorageError
- Requests for another user are forbidden before anything is stored
- Missing SMTP credentials yield a warning, not an error
- Delivery failures raise MfaDeliveryError

The database connection is an AsyncMock and the SMTP transport is patched, so
no external service is touched.

Dependency References:
- partnerboard/services/mfa.py
- partnerboard/tests/conftest.py: mock_db_conn, test_settings, smtp_settings
"""

import smtplib
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, Mock, patch

import pytest

from partnerboard.models.schemas import AuthenticatedUser
from partnerboard.services.errors import ForbiddenError, MfaDeliveryError, MfaStorageError
from partnerboard.services.mfa import (
    SMTP_MISSING_WARNING,
    build_code_email,
    generate_code,
    issue_mfa_code,
    send_code_email,
    store_code,
)


USER = AuthenticatedUser(id="user-1", email="anna@example.hu")


# =============================================================================
# Code Generation
# =============================================================================


class TestGenerateCode:
    """Tests for generate_code()."""

    def test_six_digit_numeric(self):
        for _ in range(200):
            code = generate_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_bounds(self):
        with patch("partnerboard.services.mfa.secrets.randbelow", return_value=0):
            assert generate_code() == "100000"
        with patch("partnerboard.services.mfa.secrets.randbelow", return_value=899999):
            assert generate_code() == "999999"


# =============================================================================
# Storage
# =============================================================================


class TestStoreCode:
    """Tests for store_code()."""

    pytestmark = pytest.mark.asyncio

    async def test_writes_code_and_expiry(self, mock_db_conn):
        now = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)

        expires_at = await store_code(mock_db_conn, "user-1", "123456", ttl_minutes=10, now=now)

        assert expires_at == now + timedelta(minutes=10)
        mock_db_conn.execute.assert_awaited_once()
        query, code, expiry, user_id = mock_db_conn.execute.call_args.args
        assert "email_code_attempts = 0" in query
        assert "user_mfa_settings" in query
        assert code == "123456"
        assert expiry == now + timedelta(minutes=10)
        assert user_id == "user-1"

    async def test_default_expiry_is_timezone_aware(self, mock_db_conn):
        before = datetime.now(timezone.utc)

        expires_at = await store_code(mock_db_conn, "user-1", "123456")

        assert expires_at.tzinfo is not None
        assert expires_at - before >= timedelta(minutes=10)

    async def test_no_matching_row(self, mock_db_conn):
        mock_db_conn.execute.return_value = "UPDATE 0"

        with pytest.raises(MfaStorageError):
            await store_code(mock_db_conn, "ghost", "123456")

    async def test_database_error(self, mock_db_conn):
        mock_db_conn.execute.side_effect = OSError("connection reset")

        with pytest.raises(MfaStorageError) as exc_info:
            await store_code(mock_db_conn, "user-1", "123456")

        assert exc_info.value.status_code == 500


# =============================================================================
# Email
# =============================================================================


class TestCodeEmail:
    """Tests for build_code_email() and send_code_email()."""

    def test_message_headers_and_body(self):
        msg = build_code_email("security@test.hu", "anna@example.hu", "654321")

        assert msg["Subject"] == "Umbroll MFA Kód"
        assert msg["From"] == "security@test.hu"
        assert msg["To"] == "anna@example.hu"
        plain, html = msg.get_payload()
        assert "654321" in plain.get_payload(decode=True).decode("utf-8")
        assert "10 percig" in html.get_payload(decode=True).decode("utf-8")

    def test_send_uses_starttls_and_login(self, smtp_settings):
        with patch("partnerboard.services.mfa.smtplib.SMTP") as smtp_class:
            server = MagicMock()
            smtp_class.return_value.__enter__.return_value = server

            send_code_email("anna@example.hu", "654321", smtp_settings)

        smtp_class.assert_called_once_with("smtp.test", 2525, timeout=30)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        server.send_message.assert_called_once()
        sent = server.send_message.call_args.args[0]
        assert sent["To"] == "anna@example.hu"

    def test_send_without_tls(self, smtp_settings):
        settings = smtp_settings.model_copy(update={"smtp_use_tls": False})
        with patch("partnerboard.services.mfa.smtplib.SMTP") as smtp_class:
            server = MagicMock()
            smtp_class.return_value.__enter__.return_value = server

            send_code_email("anna@example.hu", "654321", settings)

        server.starttls.assert_not_called()


# =============================================================================
# Issuance Flow
# =============================================================================


class TestIssueMfaCode:
    """Tests for issue_mfa_code()."""

    pytestmark = pytest.mark.asyncio

    async def test_other_user_forbidden(self, mock_db_conn, smtp_settings):
        sender = Mock()

        with pytest.raises(ForbiddenError) as exc_info:
            await issue_mfa_code(mock_db_conn, USER, "user-2", smtp_settings, sender=sender)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Nincs jogosultságod ehhez a művelethez."
        mock_db_conn.execute.assert_not_awaited()
        sender.assert_not_called()

    async def test_sends_code(self, mock_db_conn, smtp_settings):
        sender = Mock()

        response = await issue_mfa_code(mock_db_conn, USER, "user-1", smtp_settings, sender=sender)

        assert response.success is True
        assert response.warning is None
        sender.assert_called_once()
        recipient, code, settings = sender.call_args.args
        assert recipient == "anna@example.hu"
        assert settings is smtp_settings
        # The emailed code is the stored code
        assert mock_db_conn.execute.call_args.args[1] == code

    async def test_missing_smtp_credentials_warns(self, mock_db_conn, test_settings):
        sender = Mock()

        response = await issue_mfa_code(mock_db_conn, USER, "user-1", test_settings, sender=sender)

        assert response.success is True
        assert response.warning == SMTP_MISSING_WARNING
        mock_db_conn.execute.assert_awaited_once()
        sender.assert_not_called()

    async def test_storage_failure_stops_delivery(self, mock_db_conn, smtp_settings):
        mock_db_conn.execute.return_value = "UPDATE 0"
        sender = Mock()

        with pytest.raises(MfaStorageError):
            await issue_mfa_code(mock_db_conn, USER, "user-1", smtp_settings, sender=sender)

        sender.assert_not_called()

    async def test_delivery_failure(self, mock_db_conn, smtp_settings):
        sender = Mock(side_effect=smtplib.SMTPAuthenticationError(535, b"bad credentials"))

        with pytest.raises(MfaDeliveryError):
            await issue_mfa_code(mock_db_conn, USER, "user-1", smtp_settings, sender=sender)

    async def test_user_without_email(self, mock_db_conn, smtp_settings):
        user = AuthenticatedUser(id="user-1")

        with pytest.raises(MfaDeliveryError):
            await issue_mfa_code(mock_db_conn, user, "user-1", smtp_settings, sender=Mock())
