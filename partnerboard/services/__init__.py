"""
Partnerboard Services Module

This module contains the business logic of the partner dashboard. Apart from the
session container and the two HTTP clients, every service is stateless and pure.

Services:
- normalizer: Raw webhook rows -> canonical Partner records
- table_view: Search/filter/sort of a partner list
- derived_views: Best/worst/dormant views and payload -> DashboardData
- formatting: Percentage/score display rules and tones
- categories: Category grading, labels and distribution
- partner_detail: Detail panel summary of one partner
- partner_client: Webhook client
- session: In-memory dashboard state with replace-on-fetch semantics
- password_policy: Password strength validation
- auth: Bearer token resolution against the auth server
- mfa: Email MFA code issuance

All services are designed to be consumed by the API layer (partnerboard/api/).
"""

# =============================================================================
# Partner Data Pipeline
# =============================================================================

from partnerboard.services.normalizer import (
    FIELD_RULES,
    FieldRule,
    normalize_partner,
    normalize_batch,
    rank_partners,
)
from partnerboard.services.table_view import (
    TableState,
    apply_table_view,
    filter_partners,
    sort_partners,
    available_categories,
)
from partnerboard.services.derived_views import (
    build_dashboard,
    derive_best,
    derive_worst,
    derive_dormant,
    filter_dormant_by_threshold,
)

# =============================================================================
# Display
# =============================================================================

from partnerboard.services.formatting import (
    format_percent,
    format_score,
    rate_as_fraction,
)
from partnerboard.services.categories import (
    classify_category,
    category_label,
    category_distribution,
)
from partnerboard.services.partner_detail import (
    build_partner_detail,
    find_partner,
)

# =============================================================================
# Session and Webhook
# =============================================================================

from partnerboard.services.partner_client import PartnerDataClient
from partnerboard.services.session import DashboardSession, RefreshResult, get_session

# =============================================================================
# Authentication Adjunct
# =============================================================================

from partnerboard.services.password_policy import validate_password, PASSWORD_REQUIREMENTS
from partnerboard.services.auth import resolve_user
from partnerboard.services.mfa import issue_mfa_code, generate_code


__all__ = [
    # Partner data pipeline
    "FIELD_RULES",
    "FieldRule",
    "normalize_partner",
    "normalize_batch",
    "rank_partners",
    "TableState",
    "apply_table_view",
    "filter_partners",
    "sort_partners",
    "available_categories",
    "build_dashboard",
    "derive_best",
    "derive_worst",
    "derive_dormant",
    "filter_dormant_by_threshold",
    # Display
    "format_percent",
    "format_score",
    "rate_as_fraction",
    "classify_category",
    "category_label",
    "category_distribution",
    "build_partner_detail",
    "find_partner",
    # Session and webhook
    "PartnerDataClient",
    "DashboardSession",
    "RefreshResult",
    "get_session",
    # Authentication adjunct
    "validate_password",
    "PASSWORD_REQUIREMENTS",
    "resolve_user",
    "issue_mfa_code",
    "generate_code",
]
