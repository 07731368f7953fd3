"""
Derived Partner Views

The webhook either returns every sheet of the scoring workbook (partners, top
best, top worst, sleeping) or only the flat partner list. This module turns
either payload into DashboardData, deriving any missing view from the partner
list:

- best:    top N by value score, descending
- worst:   top N by waste score, descending
- dormant: every partner flagged dormant or with days since last quote at or
           above the threshold, most inactive first

Every derived list is re-ranked 1..len independently of the source ranks.
Supplied views are ranked by their position in the payload.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from partnerboard.core.config import get_settings
from partnerboard.models.enums import SortDirection, SortField
from partnerboard.models.schemas import DashboardData, Partner, RankedPartner
from partnerboard.services.normalizer import normalize_batch, rank_partners
from partnerboard.services.table_view import sort_partners


logger = logging.getLogger(__name__)

DEFAULT_TOP_LIMIT = 20
DEFAULT_DORMANT_THRESHOLD_DAYS = 90

# Inactivity thresholds selectable in the dormant view
DORMANT_THRESHOLD_OPTIONS: Tuple[int, ...] = (90, 120, 180)

# Payload keys per view, in priority order
PARTNERS_KEYS: Tuple[str, ...] = ("partners", "data")
BEST_KEYS: Tuple[str, ...] = ("top_best_customers", "topBest")
WORST_KEYS: Tuple[str, ...] = ("top_worst_customers", "topWorst")
SLEEPING_KEYS: Tuple[str, ...] = ("sleeping_customers", "sleeping")


# =============================================================================
# View Derivation
# =============================================================================

def derive_best(partners: Sequence[Partner], limit: int = DEFAULT_TOP_LIMIT) -> List[RankedPartner]:
    """Top ``limit`` partners by value score, ranked from 1."""
    ordered = sort_partners(partners, SortField.VALUE_SCORE, SortDirection.DESC)
    return rank_partners(ordered[:limit])


def derive_worst(partners: Sequence[Partner], limit: int = DEFAULT_TOP_LIMIT) -> List[RankedPartner]:
    """Top ``limit`` partners by waste score, ranked from 1."""
    ordered = sort_partners(partners, SortField.WASTE_SCORE, SortDirection.DESC)
    return rank_partners(ordered[:limit])


def is_dormant(partner: Partner, threshold_days: int = DEFAULT_DORMANT_THRESHOLD_DAYS) -> bool:
    return partner.is_sleeping or partner.days_since_last_quote >= threshold_days


def derive_dormant(
    partners: Sequence[Partner],
    threshold_days: int = DEFAULT_DORMANT_THRESHOLD_DAYS,
) -> List[RankedPartner]:
    """All dormant partners, most days since last quote first, ranked from 1."""
    dormant = [partner for partner in partners if is_dormant(partner, threshold_days)]
    ordered = sort_partners(dormant, SortField.DAYS_SINCE_LAST_QUOTE, SortDirection.DESC)
    return rank_partners(ordered)


def filter_dormant_by_threshold(
    dormant: Sequence[Partner],
    threshold_days: int,
) -> List[RankedPartner]:
    """
    Narrow the dormant view to partners inactive for at least ``threshold_days``.

    Used by the 90+/120+/180+ day selector; the result is re-ranked from 1 and
    keeps the dormant view's order.
    """
    return rank_partners([
        partner for partner in dormant
        if partner.days_since_last_quote >= threshold_days
    ])


# =============================================================================
# Payload Handling
# =============================================================================

def _first_view(payload: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    # First non-empty value wins, so an empty "partners" falls through to "data"
    for key in keys:
        value = payload.get(key)
        if value:
            return value
    return []


def build_dashboard(
    payload: Any,
    limit: Optional[int] = None,
    threshold_days: Optional[int] = None,
) -> DashboardData:
    """
    Build the dashboard state from a webhook payload.

    Args:
        payload: A flat list of partner rows, or an object holding one or more
            of the partners/best/worst/sleeping sheets.
        limit: Size of derived best/worst lists (default: settings.top_partner_limit).
        threshold_days: Dormancy threshold (default: settings.dormant_threshold_days).

    Returns:
        DashboardData with all four views populated where possible.
    """
    settings = get_settings()
    limit = settings.top_partner_limit if limit is None else limit
    threshold_days = settings.dormant_threshold_days if threshold_days is None else threshold_days

    if isinstance(payload, list):
        partners = normalize_batch(payload)
        top_best: List[RankedPartner] = []
        top_worst: List[RankedPartner] = []
        sleeping: List[RankedPartner] = []
    elif isinstance(payload, Mapping):
        partners = normalize_batch(_first_view(payload, PARTNERS_KEYS))
        top_best = normalize_batch(_first_view(payload, BEST_KEYS))
        top_worst = normalize_batch(_first_view(payload, WORST_KEYS))
        sleeping = normalize_batch(_first_view(payload, SLEEPING_KEYS))
    else:
        logger.warning(f"Unexpected webhook payload type {type(payload).__name__}; treating as empty")
        return DashboardData()

    if partners:
        if not top_best:
            top_best = derive_best(partners, limit)
        if not top_worst:
            top_worst = derive_worst(partners, limit)
        if not sleeping:
            sleeping = derive_dormant(partners, threshold_days)

    return DashboardData(
        partners=partners,
        top_best=top_best,
        top_worst=top_worst,
        sleeping=sleeping,
    )
