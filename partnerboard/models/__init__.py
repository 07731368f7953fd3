"""
Package initialization file for Partnerboard models.

Exports all Pydantic schemas and enumerations so other modules can import them
from partnerboard.models directly.

Usage:
    from partnerboard.models import Partner, RankedPartner, SortField
"""

# =============================================================================
# Enums
# =============================================================================

from partnerboard.models.enums import (
    PartnerCategory,
    DisplayTone,
    DormancyFilter,
    SortDirection,
    SortField,
    PartnerView,
    NotificationVariant,
)


# =============================================================================
# Schemas
# =============================================================================

from partnerboard.models.schemas import (
    # Partner records
    Partner,
    RankedPartner,
    DashboardData,
    DEFAULT_CATEGORY_LABEL,
    # Dashboard responses
    Notification,
    RefreshResponse,
    PartnerListResponse,
    CategoryCount,
    CategoryBreakdownResponse,
    PartnerDetail,
    # Authentication contracts
    PasswordValidateRequest,
    PasswordValidation,
    MfaCodeRequest,
    MfaCodeResponse,
    AuthenticatedUser,
)


__all__ = [
    # Enums
    "PartnerCategory",
    "DisplayTone",
    "DormancyFilter",
    "SortDirection",
    "SortField",
    "PartnerView",
    "NotificationVariant",
    # Partner records
    "Partner",
    "RankedPartner",
    "DashboardData",
    "DEFAULT_CATEGORY_LABEL",
    # Dashboard responses
    "Notification",
    "RefreshResponse",
    "PartnerListResponse",
    "CategoryCount",
    "CategoryBreakdownResponse",
    "PartnerDetail",
    # Authentication contracts
    "PasswordValidateRequest",
    "PasswordValidation",
    "MfaCodeRequest",
    "MfaCodeResponse",
    "AuthenticatedUser",
]
