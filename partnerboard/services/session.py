"""
Dashboard Session State

DashboardSession owns the single in-memory DashboardData of the service and the
busy flag guarding the webhook refresh.

Refresh semantics:
- one refresh at a time; a refresh requested while another is running returns
  a notification and does not fetch
- on success the data is replaced wholesale
- on failure the previous data is kept untouched and a single "fetch failed"
  notification is returned; nothing is retried
"""

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from partnerboard.models.enums import NotificationVariant
from partnerboard.models.schemas import DashboardData, Notification
from partnerboard.services.derived_views import build_dashboard
from partnerboard.services.errors import PartnerFetchError
from partnerboard.services.partner_client import PartnerDataClient


logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    """Outcome of a refresh: whether new data was loaded, and the toast to show."""
    success: bool
    notification: Notification


class DashboardSession:
    """In-memory dashboard state with replace-on-fetch semantics."""

    def __init__(self, client: Optional[PartnerDataClient] = None) -> None:
        self.client = client or PartnerDataClient()
        self._data = DashboardData()
        # Non-blocking acquire acts as the busy flag
        self._busy = threading.Lock()

    @property
    def data(self) -> DashboardData:
        return self._data

    @property
    def is_loading(self) -> bool:
        return self._busy.locked()

    def refresh(self) -> RefreshResult:
        """
        Fetch the webhook and replace the dashboard data.

        Returns:
            RefreshResult with the user-facing notification. Never raises for
            fetch failures or unprocessable payloads.
        """
        if not self._busy.acquire(blocking=False):
            logger.info("Refresh requested while another refresh is running; ignored")
            return RefreshResult(
                success=False,
                notification=Notification(
                    title="Frissítés folyamatban",
                    description="Az adatok lekérése már folyamatban van.",
                ),
            )

        try:
            payload = self.client.fetch_payload()
            data = build_dashboard(payload)
            self._data = data
        except PartnerFetchError as e:
            logger.error(f"Partner refresh failed: {e.message}")
            return self._failed_result()
        except Exception as e:
            # An unprocessable payload counts as a failed fetch
            logger.error(f"Partner payload could not be processed: {str(e)}", exc_info=True)
            return self._failed_result()
        finally:
            self._busy.release()

        logger.info(
            f"Partner data refreshed: {len(data.partners)} partners, "
            f"{len(data.top_best)} best, {len(data.top_worst)} worst, "
            f"{len(data.sleeping)} dormant"
        )
        return RefreshResult(
            success=True,
            notification=Notification(
                title="Sikeres frissítés",
                description=f"{len(data.partners)} partner adat betöltve.",
            ),
        )

    @staticmethod
    def _failed_result() -> RefreshResult:
        return RefreshResult(
            success=False,
            notification=Notification(
                title="Hiba történt",
                description="Nem sikerült lekérni az adatokat a webhookból.",
                variant=NotificationVariant.DESTRUCTIVE,
            ),
        )


@lru_cache()
def get_session() -> DashboardSession:
    """Process-wide dashboard session."""
    return DashboardSession()
