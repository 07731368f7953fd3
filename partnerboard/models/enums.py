"""
Enumeration definitions for the Partnerboard backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models and FastAPI query parameters.
"""

from enum import Enum


class PartnerCategory(str, Enum):
    """
    Grade assigned to a partner by the upstream scoring sheet.

    The sheet emits either a letter grade (A-D) or a descriptive label. Labels
    that match none of the known grades map to UNRECOGNIZED instead of being
    folded into a neighbouring grade.

    - A / MAGAS_ÉRTÉK: excellent, high value
    - B: good
    - C / KÖZEPES: average (KÖZEPES is the default when no category is sent)
    - D / ROSSZ_ARÁNY: weak, poor success ratio
    - KEVÉS_ÁRAJÁNLAT: too few quotes to judge
    """
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    HIGH_VALUE = "MAGAS_ÉRTÉK"
    POOR_RATIO = "ROSSZ_ARÁNY"
    AVERAGE = "KÖZEPES"
    FEW_QUOTES = "KEVÉS_ÁRAJÁNLAT"
    UNRECOGNIZED = "UNRECOGNIZED"


class DisplayTone(str, Enum):
    """
    Visual tone a client should render a value or badge with.

    Maps onto the dashboard's colour tokens.
    """
    SUCCESS = "success"
    WARNING = "warning"
    DESTRUCTIVE = "destructive"
    MUTED = "muted"
    PRIMARY = "primary"
    DEFAULT = "default"


class DormancyFilter(str, Enum):
    """Status filter of the partner table."""
    ALL = "all"
    ACTIVE = "active"
    DORMANT = "dormant"


class SortDirection(str, Enum):
    """Sort direction of the partner table."""
    ASC = "asc"
    DESC = "desc"


class SortField(str, Enum):
    """
    Columns the partner table can be sorted by.

    Values are the canonical keys of the webhook sheet so that a client can
    pass the same identifiers it reads from the data. RANK sorts by the
    derived 1-based position.
    """
    PARTNER = "partner"
    TOTAL_QUOTES = "osszes_arajanlat"
    COMPLETED_QUOTES = "sikeres_arajanlatok"
    INCOMPLETE_QUOTES = "sikertelen_arajanlatok"
    COMPLETION_RATE = "sikeressegi_arany"
    ADJUSTED_COMPLETION_RATE = "korrigalt_sikeressegi_arany"
    VALUE_SCORE = "ertek_pontszam"
    WASTE_SCORE = "sikertelen_pontszam"
    DAYS_SINCE_LAST_QUOTE = "napok_a_legutobbi_arajanlat_ota"
    LAST_QUOTE_DATE = "legutobbi_arajanlat_datum"
    LAST_COMPLETED_DATE = "legutobbi_sikeres_datum"
    CATEGORY = "kategoria"
    GENERATED_AT = "letrehozva"
    RANK = "rank"


class PartnerView(str, Enum):
    """
    The four partner lists the dashboard shows.

    - PARTNERS: every partner of the last fetch
    - BEST: top partners by value score
    - WORST: top partners by waste score
    - DORMANT: partners flagged dormant or inactive for the dormancy threshold
    """
    PARTNERS = "partners"
    BEST = "best"
    WORST = "worst"
    DORMANT = "dormant"


class NotificationVariant(str, Enum):
    """Severity of a user-facing notification."""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"
