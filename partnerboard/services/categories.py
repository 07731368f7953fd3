"""
Partner category grading.

The upstream sheet labels partners either with a letter grade or with a
descriptive Hungarian label, and the labels drift (casing, suffixes). This
module maps a raw label onto the closed PartnerCategory enumeration:

1. exact match on the upper-cased label
2. keyword rules, in order (MAGAS + ÉRTÉK, ROSSZ, KEVÉS, KÖZEPES)
3. otherwise PartnerCategory.UNRECOGNIZED

Display tones use single-keyword rules of their own (any of MAGAS or ÉRTÉK
means success), so an ungraded label can still carry a tone. The raw label
stays on the Partner record; grading only drives display labels,
tones and the category distribution.
"""

from collections import Counter
from typing import Dict, Iterable, List, Tuple

from partnerboard.models.enums import DisplayTone, PartnerCategory
from partnerboard.models.schemas import CategoryCount, Partner
from partnerboard.services.formatting import MISSING_DISPLAY


_EXACT: Dict[str, PartnerCategory] = {
    category.value: category
    for category in PartnerCategory
    if category is not PartnerCategory.UNRECOGNIZED
}

# (required keywords, grade), checked in order after the exact match
_KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], PartnerCategory], ...] = (
    (("MAGAS", "ÉRTÉK"), PartnerCategory.HIGH_VALUE),
    (("ROSSZ",), PartnerCategory.POOR_RATIO),
    (("KEVÉS",), PartnerCategory.FEW_QUOTES),
    (("KÖZEPES",), PartnerCategory.AVERAGE),
)

# Tones follow looser rules than grades: a single keyword is enough, so a
# label such as "ÉRTÉKES" stays ungraded but still shows the success tone
_TONE_KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], DisplayTone], ...] = (
    (("MAGAS", "ÉRTÉK"), DisplayTone.SUCCESS),
    (("ROSSZ",), DisplayTone.DESTRUCTIVE),
    (("KÖZEPES",), DisplayTone.WARNING),
    (("KEVÉS",), DisplayTone.MUTED),
)

CATEGORY_LABELS: Dict[PartnerCategory, str] = {
    PartnerCategory.A: "Kiváló",
    PartnerCategory.HIGH_VALUE: "Kiváló",
    PartnerCategory.B: "Jó",
    PartnerCategory.C: "Közepes",
    PartnerCategory.AVERAGE: "Közepes",
    PartnerCategory.D: "Gyenge",
    PartnerCategory.POOR_RATIO: "Gyenge",
    PartnerCategory.FEW_QUOTES: "Kevés ajánlat",
}

CATEGORY_TONES: Dict[PartnerCategory, DisplayTone] = {
    PartnerCategory.A: DisplayTone.SUCCESS,
    PartnerCategory.HIGH_VALUE: DisplayTone.SUCCESS,
    PartnerCategory.B: DisplayTone.WARNING,
    PartnerCategory.C: DisplayTone.WARNING,
    PartnerCategory.AVERAGE: DisplayTone.WARNING,
    PartnerCategory.D: DisplayTone.DESTRUCTIVE,
    PartnerCategory.POOR_RATIO: DisplayTone.DESTRUCTIVE,
    PartnerCategory.FEW_QUOTES: DisplayTone.MUTED,
    PartnerCategory.UNRECOGNIZED: DisplayTone.PRIMARY,
}


def classify_category(label: str) -> PartnerCategory:
    """
    Map a raw category label onto PartnerCategory.

    Examples:
        >>> classify_category("a")
        <PartnerCategory.A: 'A'>
        >>> classify_category("magas_érték_partner")
        <PartnerCategory.HIGH_VALUE: 'MAGAS_ÉRTÉK'>
        >>> classify_category("VIP")
        <PartnerCategory.UNRECOGNIZED: 'UNRECOGNIZED'>
    """
    normalized = (label or "").strip().upper()
    if not normalized:
        return PartnerCategory.UNRECOGNIZED

    exact = _EXACT.get(normalized)
    if exact is not None:
        return exact

    for keywords, category in _KEYWORD_RULES:
        if all(keyword in normalized for keyword in keywords):
            return category

    return PartnerCategory.UNRECOGNIZED


def category_label(label: str) -> str:
    """Display label of a raw category; unrecognized labels are shown as sent."""
    category = classify_category(label)
    if category is PartnerCategory.UNRECOGNIZED:
        return label or MISSING_DISPLAY
    return CATEGORY_LABELS[category]


def category_tone(label: str) -> DisplayTone:
    """Badge tone of a raw category; any tone keyword wins over the grade."""
    normalized = (label or "").strip().upper()
    for keywords, tone in _TONE_KEYWORD_RULES:
        if any(keyword in normalized for keyword in keywords):
            return tone
    return CATEGORY_TONES[classify_category(label)]


def category_distribution(partners: Iterable[Partner]) -> List[CategoryCount]:
    """
    Count partners per raw category label.

    Empty labels and zero counts are omitted. Ordered by count descending, ties
    in first-seen order.
    """
    counts = Counter(partner.category for partner in partners if partner.category)
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)

    return [
        CategoryCount(
            category=label,
            label=category_label(label),
            grade=classify_category(label),
            tone=category_tone(label),
            count=count,
        )
        for label, count in ordered
        if count > 0
    ]
