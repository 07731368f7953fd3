"""
Pytest Configuration and Shared Fixtures for Partnerboard Backend Tests.

This module provides fixtures and configuration for all backend tests, supporting:
- Async test execution with pytest-asyncio
- Mock database connection fixtures for the MFA code storage
- Settings fixtures with explicit, environment-independent values
- Sample webhook rows in every key variant the upstream sheet produces
- Ready-made Partner records for table view and derived view tests

Dependency References:
- partnerboard/core/config.py: Settings, get_settings
- partnerboard/services/normalizer.py: normalize_batch
- partnerboard/services/session.py: get_session
"""

from typing import Any, Dict, Generator, List
from unittest.mock import AsyncMock, Mock

import pytest

from partnerboard.core.config import Settings, get_settings
from partnerboard.models.schemas import RankedPartner
from partnerboard.services.normalizer import normalize_batch
from partnerboard.services.session import get_session


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - slow: Marks tests as slow (deselect with -m "not slow")
    - integration: Marks tests that talk to a real webhook, database or SMTP server

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line(
        'markers',
        'slow: marks tests as slow (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'integration: marks tests requiring external service connectivity'
    )


# ============================================================
# CACHE RESET
# ============================================================

@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """
    Clear the cached Settings and DashboardSession around every test.

    Both are process-wide singletons behind @lru_cache; clearing them keeps
    state from one test out of the next.
    """
    get_settings.cache_clear()
    get_session.cache_clear()
    yield
    get_settings.cache_clear()
    get_session.cache_clear()


# ============================================================
# SETTINGS FIXTURES
# ============================================================

@pytest.fixture
def test_settings() -> Settings:
    """
    Provide Settings with explicit values for every external service.

    Values passed to the constructor take precedence over environment
    variables, so tests behave the same on any machine.

    SMTP credentials are absent: MFA issuance returns the "not configured"
    warning unless a test uses smtp_settings instead.
    """
    return Settings(
        partner_webhook_url='https://hooks.test/partners',
        webhook_timeout_seconds=None,
        database_url=None,
        supabase_url='https://auth.test',
        supabase_anon_key='test-anon-key',
        smtp_host='smtp.test',
        smtp_port=2525,
        smtp_user=None,
        smtp_password=None,
        smtp_use_tls=True,
        mfa_sender='security@test.hu',
        mfa_code_ttl_minutes=10,
        top_partner_limit=20,
        dormant_threshold_days=90,
        company_average_rate=0.14,
    )


@pytest.fixture
def smtp_settings(test_settings: Settings) -> Settings:
    """test_settings with SMTP credentials present."""
    return test_settings.model_copy(update={
        'smtp_user': 'mailer',
        'smtp_password': 'secret',
    })


# ============================================================
# DATABASE MOCK FIXTURES
# ============================================================

@pytest.fixture
def mock_db_conn() -> AsyncMock:
    """
    Create a mock asyncpg connection.

    ``execute`` answers with the status string asyncpg returns for an UPDATE
    that touched one row. Override per test:

        mock_db_conn.execute.return_value = 'UPDATE 0'
        mock_db_conn.execute.side_effect = OSError('connection reset')
    """
    conn = AsyncMock()
    conn.execute = AsyncMock(return_value='UPDATE 1')
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetchval = AsyncMock(return_value=None)
    return conn


@pytest.fixture
def mock_db_pool(mock_db_conn: AsyncMock) -> AsyncMock:
    """
    Create a mock asyncpg pool whose acquire() yields mock_db_conn.

    Methods Mocked:
        - pool.acquire(): Returns async context manager
        - pool.close(): No-op
    """
    pool = AsyncMock()

    acquire_context = AsyncMock()
    acquire_context.__aenter__ = AsyncMock(return_value=mock_db_conn)
    acquire_context.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = Mock(return_value=acquire_context)

    pool.close = AsyncMock(return_value=None)
    return pool


# ============================================================
# SAMPLE WEBHOOK ROWS
# ============================================================

@pytest.fixture
def sample_raw_rows() -> List[Dict[str, Any]]:
    """
    Webhook rows covering the three key variants of the sheet.

    - Acme Kft.: canonical ASCII keys
    - Bárány Bt.: accented Hungarian headers, dotted date, "igaz" dormancy flag
    - Cobalt Zrt.: English aliases, percentage-scaled rates
    - Delta Kft.: sparse row, only name and days since last quote
    """
    return [
        {
            'partner': 'Acme Kft.',
            'osszes_arajanlat': 10,
            'sikeres_arajanlatok': 3,
            'sikertelen_arajanlatok': 7,
            'sikeressegi_arany': 0.3,
            'korrigalt_sikeressegi_arany': 0.2,
            'ertek_pontszam': 2.0,
            'sikertelen_pontszam': 8.0,
            'kategoria': 'KÖZEPES',
            'alvo': False,
            'napok_a_legutobbi_arajanlat_ota': 12,
            'legutobbi_arajanlat_datum': '2024-03-15',
        },
        {
            'Partner': 'Bárány Bt.',
            'összes_árajánlat': '40',
            'sikeres_árajánlatok': 12,
            'sikertelen_árajánlatok': 28,
            'sikerességi_arány': '0,3',
            'korrigált_sikerességi_arány': 0.29,
            'érték_pontszám': 11.6,
            'sikertelen_pontszám': 28.4,
            'kategória': 'A',
            'alvó(igaz/hamis)': 'igaz',
            'napok_a_legutóbbi_árajánlat_óta': 130,
            'legutóbbi_árajánlat_dátum': '2023.11.02.',
        },
        {
            'partner': 'Cobalt Zrt.',
            'total_quotes': 5,
            'completed_quotes': 0,
            'incomplete_quotes': 5,
            'completion_rate': 0,
            'adjusted_completion_rate': 4.5,
            'value_score': 0.2,
            'waste_score': 4.8,
            'category': 'ROSSZ_ARÁNY',
            'is_sleeping': False,
            'days_since_last_quote': 200,
        },
        {
            'partner': 'Delta Kft.',
            'napok_a_legutobbi_arajanlat_ota': 95,
        },
    ]


@pytest.fixture
def sample_partners(sample_raw_rows: List[Dict[str, Any]]) -> List[RankedPartner]:
    """sample_raw_rows normalized and ranked by input position."""
    return normalize_batch(sample_raw_rows)


def make_rows(count: int) -> List[Dict[str, Any]]:
    """
    Generate ``count`` canonical webhook rows with distinct, predictable scores.

    Row i has value score i and waste score count - i, so the best list is the
    reverse of the input and the worst list follows the input.
    """
    return [
        {
            'partner': f'Partner {i:03d}',
            'osszes_arajanlat': i + 1,
            'ertek_pontszam': float(i),
            'sikertelen_pontszam': float(count - i),
            'napok_a_legutobbi_arajanlat_ota': i * 5,
            'kategoria': 'A' if i % 2 else 'B',
        }
        for i in range(count)
    ]


@pytest.fixture
def many_rows() -> List[Dict[str, Any]]:
    """Thirty canonical rows, more than one top list holds."""
    return make_rows(30)


# ============================================================
# MODULE EXPORTS
# ============================================================

__all__ = [
    'make_rows',
]
