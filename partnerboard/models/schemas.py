"""
Pydantic request/response models for the Partnerboard backend.

This module provides the canonical partner record, its ranked derivation, the
dashboard container holding the four partner lists, and the request/response
contracts of the partner and authentication routers.

Partner field naming:
- Python attribute names are the English aliases the webhook may send
  (total_quotes, value_score, ...). ``model_dump()`` therefore yields a mapping
  the normalizer accepts back unchanged.
- ``model_dump(by_alias=True)`` yields the canonical sheet keys
  (osszes_arajanlat, ertek_pontszam, ...) that the dashboard client reads.

All models use Pydantic v2 syntax.
"""

from datetime import date as DateType
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from partnerboard.models.enums import (
    DisplayTone,
    NotificationVariant,
    PartnerCategory,
    PartnerView,
)


DEFAULT_CATEGORY_LABEL = PartnerCategory.AVERAGE.value


# =============================================================================
# Partner Records
# =============================================================================


class Partner(BaseModel):
    """
    Canonical partner record.

    Every field has a type-appropriate default so that a record built from a
    sparse webhook row is always complete. Scores and rates are consumed as
    computed upstream; nothing here recomputes them.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "partner": "Acme Kft.",
                "osszes_arajanlat": 10,
                "sikeres_arajanlatok": 3,
                "sikertelen_arajanlatok": 7,
                "sikeressegi_arany": 0.3,
                "korrigalt_sikeressegi_arany": 0.2,
                "ertek_pontszam": 2.0,
                "sikertelen_pontszam": 8.0,
                "kategoria": "KÖZEPES",
                "alvo": False,
                "napok_a_legutobbi_arajanlat_ota": 12,
            }
        },
    )

    partner: str = Field(
        default="",
        description="Partner name, unique within a fetch batch",
    )
    total_quotes: int = Field(
        default=0,
        ge=0,
        serialization_alias="osszes_arajanlat",
        description="Total number of quotes",
    )
    completed_quotes: int = Field(
        default=0,
        ge=0,
        serialization_alias="sikeres_arajanlatok",
        description="Successful quotes",
    )
    incomplete_quotes: int = Field(
        default=0,
        ge=0,
        serialization_alias="sikertelen_arajanlatok",
        description="Failed quotes",
    )
    completion_rate: float = Field(
        default=0.0,
        serialization_alias="sikeressegi_arany",
        description="Raw success rate, either a fraction (0-1) or a percentage (0-100)",
    )
    last_completed_date: Optional[DateType] = Field(
        default=None,
        serialization_alias="legutobbi_sikeres_datum",
        description="Date of the last successful quote",
    )
    last_quote_date: Optional[DateType] = Field(
        default=None,
        serialization_alias="legutobbi_arajanlat_datum",
        description="Date of the last quote",
    )
    days_since_last_quote: int = Field(
        default=0,
        ge=0,
        serialization_alias="napok_a_legutobbi_arajanlat_ota",
        description="Days elapsed since the last quote",
    )
    is_sleeping: bool = Field(
        default=False,
        serialization_alias="alvo",
        description="Dormancy flag set by the upstream sheet",
    )
    generated_at: str = Field(
        default="",
        serialization_alias="letrehozva",
        description="Creation timestamp of the row, as sent",
    )
    adjusted_completion_rate: float = Field(
        default=0.0,
        serialization_alias="korrigalt_sikeressegi_arany",
        description="Smoothed success rate, fraction or percentage",
    )
    value_score: float = Field(
        default=0.0,
        serialization_alias="ertek_pontszam",
        description="Expected successful quotes (adjusted rate x total quotes)",
    )
    category: str = Field(
        default=DEFAULT_CATEGORY_LABEL,
        serialization_alias="kategoria",
        description="Category label as sent by the sheet",
    )
    waste_score: float = Field(
        default=0.0,
        serialization_alias="sikertelen_pontszam",
        description="Expected failed quotes ((1 - adjusted rate) x total quotes)",
    )


class RankedPartner(Partner):
    """Partner record with its 1-based position in a derived list."""

    rank: int = Field(
        ...,
        ge=1,
        description="1-based position in the list this record was derived into",
    )


class DashboardData(BaseModel):
    """
    The complete in-memory state of the dashboard.

    Replaced wholesale on every successful fetch.
    """
    partners: List[RankedPartner] = Field(default_factory=list)
    top_best: List[RankedPartner] = Field(default_factory=list)
    top_worst: List[RankedPartner] = Field(default_factory=list)
    sleeping: List[RankedPartner] = Field(default_factory=list)

    def view(self, name: PartnerView) -> List[RankedPartner]:
        """Return the list backing one of the dashboard views."""
        if name == PartnerView.BEST:
            return self.top_best
        if name == PartnerView.WORST:
            return self.top_worst
        if name == PartnerView.DORMANT:
            return self.sleeping
        return self.partners

    def counts(self) -> Dict[str, int]:
        return {
            PartnerView.PARTNERS.value: len(self.partners),
            PartnerView.BEST.value: len(self.top_best),
            PartnerView.WORST.value: len(self.top_worst),
            PartnerView.DORMANT.value: len(self.sleeping),
        }


# =============================================================================
# Dashboard Responses
# =============================================================================


class Notification(BaseModel):
    """User-facing toast produced by a refresh."""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


class RefreshResponse(BaseModel):
    """Response of POST /partners/refresh."""
    success: bool
    notification: Notification
    counts: Dict[str, int] = Field(default_factory=dict)


class PartnerListResponse(BaseModel):
    """
    Response of GET /partners.

    ``partners`` carries the canonical sheet keys (by-alias dumps).
    """
    view: PartnerView
    total: int = Field(..., description="Records in the view before filtering")
    count: int = Field(..., description="Records after filtering")
    partners: List[dict] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


class CategoryCount(BaseModel):
    """One slice of the category distribution."""
    category: str
    label: str
    grade: PartnerCategory
    tone: DisplayTone
    count: int


class CategoryBreakdownResponse(BaseModel):
    """Response of GET /partners/categories."""
    options: List[str] = Field(default_factory=list)
    distribution: List[CategoryCount] = Field(default_factory=list)


class PartnerDetail(BaseModel):
    """
    Display-ready summary of a single partner.

    Rates are formatted with the dual-unit percentage rule; the above-average
    comparison is done on the fraction-normalized adjusted rate.
    """
    partner: dict
    category_label: str
    category_tone: DisplayTone
    is_sleeping: bool
    completion_rate_display: str
    adjusted_rate_display: str
    company_average_display: str
    is_above_average: bool
    value_score_display: str
    waste_score_display: str
    days_since_last_quote: int
    recency_tone: DisplayTone
    last_quote_date_display: str
    last_completed_date_display: str


# =============================================================================
# Authentication Contracts
# =============================================================================


class PasswordValidateRequest(BaseModel):
    """Body of POST /auth/password/validate."""
    password: str = Field(default="")


class PasswordValidation(BaseModel):
    """Result of the password strength check."""
    isValid: bool
    errors: List[str] = Field(default_factory=list)


class MfaCodeRequest(BaseModel):
    """Body of POST /auth/mfa/send-code."""
    model_config = ConfigDict(str_strip_whitespace=True)

    userId: str = Field(..., min_length=1, description="User the code is issued for")


class MfaCodeResponse(BaseModel):
    """Successful response of POST /auth/mfa/send-code."""
    success: bool = True
    warning: Optional[str] = None


class AuthenticatedUser(BaseModel):
    """User resolved from a bearer token by the auth server."""
    id: str
    email: Optional[str] = None
