"""
Partner Record Normalizer

This module converts the heterogeneous rows returned by the partner webhook into
canonical Partner records. The upstream sheet is maintained by hand and exported
through several automations, so the same attribute arrives under different keys:

- the canonical ASCII key            (osszes_arajanlat)
- the accented Hungarian header      (összes_árajánlat)
- an English alias                   (total_quotes)

Each attribute is described by one FieldRule in FIELD_RULES: an ordered key list
and a coercion function. The first key holding a non-null value wins; when no key
is present the rule's default is used. Coercion never raises: a value that does
not convert degrades to the default.

The dormancy flag is the one attribute checked across all of its keys: a row is
dormant if any of them holds True or the sheet's "igaz" sentinel.

Normalizing a record twice is a no-op, both on the Partner itself and on its
``model_dump()`` / ``model_dump(by_alias=True)`` forms.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from partnerboard.models.schemas import DEFAULT_CATEGORY_LABEL, Partner, RankedPartner


logger = logging.getLogger(__name__)


# Case-sensitive string values the sheet uses for a true dormancy flag
DORMANT_SENTINELS: Tuple[str, ...] = ("igaz",)

_DOTTED_DATE = re.compile(r"^(\d{4})\.\s?(\d{1,2})\.\s?(\d{1,2})\.?$")


# =============================================================================
# Coercion Functions
# =============================================================================

def coerce_float(value: Any, default: float = 0.0) -> float:
    """
    Convert a webhook value to a finite float.

    Accepts numbers, numeric strings (including a decimal comma) and booleans.
    None, NaN, infinities and anything unparseable yield ``default``.
    """
    if value is None:
        return default
    if isinstance(value, (bool, np.bool_)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        value = text
    elif not isinstance(value, (int, float, Decimal, np.number)):
        return default

    # Integers beyond float range come back from to_numeric as plain ints
    try:
        number = float(pd.to_numeric(value, errors="coerce"))
    except (TypeError, ValueError, OverflowError):
        return default

    if not np.isfinite(number):
        return default
    return number


def coerce_count(value: Any, default: int = 0) -> int:
    """Convert a webhook value to a non-negative integer count."""
    number = coerce_float(value, float(default))
    return max(0, int(round(number)))


def coerce_date(value: Any, default: Optional[date] = None) -> Optional[date]:
    """
    Convert a webhook value to a calendar date.

    Accepts date/datetime objects, ISO strings and the dotted form the sheet
    exports (``2024.03.15.``). Anything else yields ``default``.
    """
    if value is None:
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return default

    text = value.strip()
    if not text:
        return default
    dotted = _DOTTED_DATE.match(text)
    if dotted:
        text = "-".join(part.zfill(2) for part in dotted.groups())

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return default
    if pd.isna(parsed):
        return default
    return parsed.date()


def coerce_text(value: Any, default: str = "") -> str:
    """Convert a webhook value to a string; None yields ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    return str(value)


def coerce_flag(value: Any, default: bool = False) -> bool:
    """True only for a boolean True or one of DORMANT_SENTINELS."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        return value in DORMANT_SENTINELS
    return default


# =============================================================================
# Accessor Table
# =============================================================================

@dataclass(frozen=True)
class FieldRule:
    """
    How one Partner attribute is read from a raw webhook row.

    Attributes:
        attribute: Partner attribute name.
        keys: Source keys in priority order.
        coerce: Conversion applied to the selected value.
        default: Value used when no key is present or coercion fails.
        skip_empty: Treat empty strings as absent and try the next key.
        match_any: Evaluate every key and OR the results (boolean flags).
    """
    attribute: str
    keys: Tuple[str, ...]
    coerce: Callable[[Any, Any], Any]
    default: Any
    skip_empty: bool = False
    match_any: bool = False

    def resolve(self, raw: Mapping[str, Any]) -> Any:
        if self.match_any:
            return any(self.coerce(raw.get(key), self.default) for key in self.keys)

        for key in self.keys:
            value = raw.get(key)
            if value is None:
                continue
            if self.skip_empty and value == "":
                continue
            return self.coerce(value, self.default)
        return self.default


FIELD_RULES: Tuple[FieldRule, ...] = (
    FieldRule("partner", ("partner", "Partner"), coerce_text, "", skip_empty=True),
    FieldRule(
        "total_quotes",
        ("osszes_arajanlat", "összes_árajánlat", "total_quotes"),
        coerce_count, 0,
    ),
    FieldRule(
        "completed_quotes",
        ("sikeres_arajanlatok", "sikeres_árajánlatok", "completed_quotes"),
        coerce_count, 0,
    ),
    FieldRule(
        "incomplete_quotes",
        ("sikertelen_arajanlatok", "sikertelen_árajánlatok", "incomplete_quotes"),
        coerce_count, 0,
    ),
    FieldRule(
        "completion_rate",
        ("sikeressegi_arany", "sikerességi_arány", "completion_rate"),
        coerce_float, 0.0,
    ),
    FieldRule(
        "last_completed_date",
        ("legutobbi_sikeres_datum", "legutóbbi_sikeres_dátum", "last_completed_date"),
        coerce_date, None,
    ),
    FieldRule(
        "last_quote_date",
        ("legutobbi_arajanlat_datum", "legutóbbi_árajánlat_dátum", "last_quote_date"),
        coerce_date, None,
    ),
    FieldRule(
        "days_since_last_quote",
        (
            "napok_a_legutobbi_arajanlat_ota",
            "napok_a_legutóbbi_árajánlat_óta",
            "days_since_last_quote",
        ),
        coerce_count, 0,
    ),
    FieldRule(
        "is_sleeping",
        ("alvo", "alvó", "alvó(igaz/hamis)", "is_sleeping"),
        coerce_flag, False,
        match_any=True,
    ),
    FieldRule(
        "generated_at",
        ("letrehozva", "létrehozva", "generated_at"),
        coerce_text, "",
    ),
    FieldRule(
        "adjusted_completion_rate",
        (
            "korrigalt_sikeressegi_arany",
            "korrigált_sikerességi_arány",
            "adjusted_completion_rate",
        ),
        coerce_float, 0.0,
    ),
    FieldRule(
        "value_score",
        ("ertek_pontszam", "érték_pontszám", "value_score"),
        coerce_float, 0.0,
    ),
    FieldRule(
        "category",
        ("kategoria", "kategória", "category"),
        coerce_text, DEFAULT_CATEGORY_LABEL,
    ),
    FieldRule(
        "waste_score",
        ("sikertelen_pontszam", "sikertelen_pontszám", "waste_score"),
        coerce_float, 0.0,
    ),
)


# =============================================================================
# Normalization
# =============================================================================

def normalize_partner(raw: Any) -> Partner:
    """
    Build a canonical Partner from an arbitrary webhook row.

    Args:
        raw: A mapping from the webhook, or an existing Partner. Anything else is
            treated as an empty row.

    Returns:
        Partner with every attribute resolved through FIELD_RULES.
    """
    if isinstance(raw, Partner):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        logger.debug(f"Non-mapping partner row of type {type(raw).__name__} normalized to defaults")
        raw = {}

    values = {rule.attribute: rule.resolve(raw) for rule in FIELD_RULES}
    return Partner(**values)


def with_rank(partner: Partner, rank: int) -> RankedPartner:
    """Attach a 1-based rank to a partner, dropping any previous rank."""
    data = partner.model_dump(exclude={"rank"})
    return RankedPartner(**data, rank=rank)


def rank_partners(partners: Sequence[Partner]) -> List[RankedPartner]:
    """Re-rank a sequence 1..len in its current order."""
    return [with_rank(partner, index) for index, partner in enumerate(partners, start=1)]


def normalize_batch(data: Any) -> List[RankedPartner]:
    """
    Normalize a list of webhook rows, ranking each by its input position.

    None, empty input and anything that is not a list yield an empty list.
    """
    if not data or not isinstance(data, (list, tuple)):
        return []
    return rank_partners([normalize_partner(item) for item in data])
