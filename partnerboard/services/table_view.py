"""
Partner Table View Engine

Given the partners of one dashboard view and the table's filter/sort state, this
module produces the display sequence: filter first, then sort on a single field.

Filters:
- search: case-insensitive substring match on the partner name
- category: equality on the raw category label ("all" disables it)
- status: all / active / dormant, on the dormancy flag
- min_quotes: floor on total quotes (None or 0 disables it)

Sorting:
- string columns use an accent- and case-insensitive collation key, with the
  raw text as secondary key
- numeric columns and rank treat missing/NaN as 0
- ties keep their input order

Everything here is pure: inputs are never mutated and a new list is returned.
"""

import math
import unicodedata
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from partnerboard.models.enums import DormancyFilter, SortDirection, SortField
from partnerboard.models.schemas import Partner
from partnerboard.services.normalizer import FIELD_RULES


P = TypeVar("P", bound=Partner)

ALL_CATEGORIES = "all"

# Sort field -> Partner attribute, derived from the canonical key of each rule
SORT_ATTRIBUTES: Dict[SortField, str] = {
    **{
        SortField(rule.keys[0]): rule.attribute
        for rule in FIELD_RULES
        if rule.keys[0] in {field.value for field in SortField}
    },
    SortField.RANK: "rank",
}

STRING_SORT_FIELDS = frozenset({
    SortField.PARTNER,
    SortField.CATEGORY,
    SortField.GENERATED_AT,
    SortField.LAST_QUOTE_DATE,
    SortField.LAST_COMPLETED_DATE,
})


@dataclass
class TableState:
    """
    Filter and sort state of one partner table.

    Defaults match the dashboard's initial view: no filters, sorted by value
    score descending.
    """
    search: str = ""
    category: str = ALL_CATEGORIES
    status: DormancyFilter = DormancyFilter.ALL
    min_quotes: Optional[int] = None
    sort_field: SortField = SortField.VALUE_SCORE
    sort_direction: SortDirection = SortDirection.DESC

    def toggle_sort(self, field: SortField) -> None:
        """
        Select a sort column.

        Selecting the active column flips the direction; selecting another
        column switches to it in descending order.
        """
        if field == self.sort_field:
            self.sort_direction = (
                SortDirection.ASC
                if self.sort_direction == SortDirection.DESC
                else SortDirection.DESC
            )
        else:
            self.sort_field = field
            self.sort_direction = SortDirection.DESC


# =============================================================================
# Filtering
# =============================================================================

def _matches(partner: Partner, state: TableState) -> bool:
    if state.search and state.search.casefold() not in partner.partner.casefold():
        return False

    if state.category and state.category != ALL_CATEGORIES and partner.category != state.category:
        return False

    if state.status == DormancyFilter.ACTIVE and partner.is_sleeping:
        return False
    if state.status == DormancyFilter.DORMANT and not partner.is_sleeping:
        return False

    if state.min_quotes and partner.total_quotes < state.min_quotes:
        return False

    return True


def filter_partners(partners: Iterable[P], state: TableState) -> List[P]:
    """Return the partners that pass every active filter, in input order."""
    return [partner for partner in partners if _matches(partner, state)]


# =============================================================================
# Sorting
# =============================================================================

def collation_key(text: str) -> Tuple[str, str]:
    """
    Locale-aware ordering key: base letters case-folded first, raw text second.

    "Ábel" sorts between "Abel" and "Ac", as a Hungarian reader expects.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), text


def _numeric(value: Any) -> float:
    if value is None or isinstance(value, str):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def _text(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def sort_key(field: SortField):
    """Return a key function sorting partners by ``field``."""
    attribute = SORT_ATTRIBUTES[field]

    if field in STRING_SORT_FIELDS:
        return lambda partner: collation_key(_text(getattr(partner, attribute, None)))
    return lambda partner: _numeric(getattr(partner, attribute, None))


def sort_partners(
    partners: Iterable[P],
    field: SortField,
    direction: SortDirection = SortDirection.DESC,
) -> List[P]:
    """Return a new list sorted on ``field``; equal keys keep their input order."""
    return sorted(
        partners,
        key=sort_key(field),
        reverse=direction == SortDirection.DESC,
    )


# =============================================================================
# View
# =============================================================================

def apply_table_view(partners: Sequence[P], state: TableState) -> List[P]:
    """
    Filter then sort a partner list for display.

    Args:
        partners: Records of the active dashboard view. Not modified.
        state: Current filter/sort state.

    Returns:
        A new list; its length equals the number of partners passing the filters.
    """
    return sort_partners(
        filter_partners(partners, state),
        state.sort_field,
        state.sort_direction,
    )


def available_categories(partners: Iterable[Partner]) -> List[str]:
    """Distinct non-empty category labels, for the category filter options."""
    return sorted({partner.category for partner in partners if partner.category}, key=collation_key)
