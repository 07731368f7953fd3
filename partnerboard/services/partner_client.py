"""
Partner Webhook Client

Fetches the partner performance sheets from the automation webhook. The webhook
expects a POST with the JSON body ``{"action": "getPartners"}`` and answers with
either a flat list of partner rows or an object holding several sheets.

Failure handling:
- transport errors, non-2xx responses and unparseable JSON all raise
  PartnerFetchError with a message suitable for logs
- there are no retries; the caller decides whether to fetch again
"""

import logging
from typing import Any, Optional

import requests

from partnerboard.core.config import Settings, get_settings
from partnerboard.services.errors import PartnerFetchError


logger = logging.getLogger(__name__)

GET_PARTNERS_ACTION = "getPartners"


class PartnerDataClient:
    """
    Thin wrapper around the partner webhook.

    Args:
        settings: Settings holding the webhook URL and optional timeout.
        session: requests.Session to use (a new one is created if omitted).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.settings.partner_webhook_url

    def fetch_payload(self) -> Any:
        """
        POST the getPartners action and return the decoded JSON payload.

        Raises:
            PartnerFetchError: On transport failure, non-2xx status or invalid JSON.
        """
        try:
            response = self.session.post(
                self.url,
                json={"action": GET_PARTNERS_ACTION},
                headers={"Content-Type": "application/json"},
                timeout=self.settings.webhook_timeout_seconds,
            )
        except requests.RequestException as e:
            raise PartnerFetchError(f"Webhook request failed: {e}") from e

        if not response.ok:
            raise PartnerFetchError(f"Webhook returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise PartnerFetchError(f"Webhook returned invalid JSON: {e}") from e

        logger.debug(f"Webhook payload received ({type(payload).__name__})")
        return payload
