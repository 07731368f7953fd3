"""
Partner detail summary.

Builds the display-ready payload of the partner side panel: formatted rates and
scores, the comparison of the partner's adjusted success rate against the
company average, and the recency tone of its last quote.
"""

from typing import Iterable, Optional

from partnerboard.models.schemas import Partner, PartnerDetail
from partnerboard.services.categories import category_label, category_tone
from partnerboard.services.formatting import (
    format_date,
    format_percent,
    format_score,
    rate_as_fraction,
    recency_tone,
)


DEFAULT_COMPANY_AVERAGE = 0.14


def find_partner(partners: Iterable[Partner], name: str) -> Optional[Partner]:
    """First partner whose name equals ``name`` (case-insensitive)."""
    wanted = name.casefold()
    for partner in partners:
        if partner.partner.casefold() == wanted:
            return partner
    return None


def build_partner_detail(
    partner: Partner,
    company_average: float = DEFAULT_COMPANY_AVERAGE,
) -> PartnerDetail:
    """
    Summarize one partner for the detail panel.

    Args:
        partner: The partner to describe.
        company_average: Company-wide adjusted success rate, fraction or percentage.

    Returns:
        PartnerDetail; ``is_above_average`` compares both rates as fractions.
    """
    is_above_average = (
        rate_as_fraction(partner.adjusted_completion_rate) > rate_as_fraction(company_average)
    )

    return PartnerDetail(
        partner=partner.model_dump(mode="json", by_alias=True),
        category_label=category_label(partner.category),
        category_tone=category_tone(partner.category),
        is_sleeping=partner.is_sleeping,
        completion_rate_display=format_percent(partner.completion_rate),
        adjusted_rate_display=format_percent(partner.adjusted_completion_rate),
        company_average_display=format_percent(company_average),
        is_above_average=is_above_average,
        value_score_display=format_score(partner.value_score),
        waste_score_display=format_score(partner.waste_score),
        days_since_last_quote=partner.days_since_last_quote,
        recency_tone=recency_tone(partner.days_since_last_quote),
        last_quote_date_display=format_date(partner.last_quote_date),
        last_completed_date_display=format_date(partner.last_completed_date),
    )
