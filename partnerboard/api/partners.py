"""
FastAPI router module for the partner dashboard.

Key Endpoints:
- POST /partners/refresh - Fetch the webhook and replace the dashboard data
- GET /partners/status - Loading flag and per-view record counts
- GET /partners - One dashboard view, filtered and sorted
- GET /partners/categories - Category filter options and distribution
- GET /partners/{name} - Detail panel summary of one partner

Handlers are plain ``def`` functions: the refresh performs a blocking HTTP call
and FastAPI runs such handlers in its threadpool. Filtering and sorting are
recomputed from the session's data on every request.

Dependencies:
- partnerboard/core/dependencies.py: DashboardSessionDep, SettingsDep
- partnerboard/services/table_view.py: TableState, apply_table_view
- partnerboard/services/derived_views.py: filter_dormant_by_threshold
"""

import logging
from typing import Dict, Optional, Tuple

from fastapi import APIRouter, HTTPException, Query

from partnerboard.core.dependencies import DashboardSessionDep, SettingsDep
from partnerboard.models.enums import DormancyFilter, PartnerView, SortDirection, SortField
from partnerboard.models.schemas import (
    CategoryBreakdownResponse,
    PartnerDetail,
    PartnerListResponse,
    RefreshResponse,
)
from partnerboard.services.categories import category_distribution
from partnerboard.services.derived_views import filter_dormant_by_threshold
from partnerboard.services.partner_detail import build_partner_detail, find_partner
from partnerboard.services.table_view import (
    ALL_CATEGORIES,
    TableState,
    apply_table_view,
    available_categories,
)


# =============================================================================
# Module Configuration
# =============================================================================

logger = logging.getLogger(__name__)

# Initial sort of each view when the client does not choose one
DEFAULT_SORTS: Dict[PartnerView, Tuple[SortField, SortDirection]] = {
    PartnerView.PARTNERS: (SortField.VALUE_SCORE, SortDirection.DESC),
    PartnerView.BEST: (SortField.RANK, SortDirection.ASC),
    PartnerView.WORST: (SortField.RANK, SortDirection.ASC),
    PartnerView.DORMANT: (SortField.DAYS_SINCE_LAST_QUOTE, SortDirection.DESC),
}


# =============================================================================
# Router Definition
# =============================================================================

router = APIRouter(prefix="/partners")


# =============================================================================
# POST /partners/refresh
# =============================================================================


@router.post("/refresh", response_model=RefreshResponse)
def refresh_partners(session: DashboardSessionDep) -> RefreshResponse:
    """
    Fetch the partner webhook and replace the dashboard data.

    A failed fetch leaves the previous data in place and returns
    ``success: false`` with a destructive notification. A refresh requested
    while one is already running is ignored.

    Example Response:
        {
            "success": true,
            "notification": {
                "title": "Sikeres frissítés",
                "description": "42 partner adat betöltve.",
                "variant": "default"
            },
            "counts": {"partners": 42, "best": 20, "worst": 20, "dormant": 7}
        }
    """
    result = session.refresh()
    return RefreshResponse(
        success=result.success,
        notification=result.notification,
        counts=session.data.counts(),
    )


# =============================================================================
# GET /partners/status
# =============================================================================


@router.get("/status")
def get_status(session: DashboardSessionDep) -> dict:
    """Loading flag and record counts of the current dashboard data."""
    return {
        "isLoading": session.is_loading,
        "counts": session.data.counts(),
    }


# =============================================================================
# GET /partners
# =============================================================================


@router.get("", response_model=PartnerListResponse)
def list_partners(
    session: DashboardSessionDep,
    view: PartnerView = Query(default=PartnerView.PARTNERS, description="Dashboard view"),
    search: str = Query(default="", description="Case-insensitive partner name search"),
    category: str = Query(default=ALL_CATEGORIES, description="Raw category label or 'all'"),
    status: DormancyFilter = Query(default=DormancyFilter.ALL, description="all / active / dormant"),
    min_quotes: Optional[int] = Query(default=None, ge=0, description="Minimum total quotes"),
    sort_field: Optional[SortField] = Query(default=None, description="Sort column"),
    sort_direction: Optional[SortDirection] = Query(default=None, description="asc / desc"),
    threshold_days: Optional[int] = Query(
        default=None,
        ge=0,
        description="Dormant view only: minimum days since last quote",
    ),
) -> PartnerListResponse:
    """
    Return one dashboard view, filtered and sorted.

    Without ``sort_field`` the view's default sort applies. Without
    ``sort_direction`` a chosen field sorts descending.
    """
    records = session.data.view(view)
    if view == PartnerView.DORMANT and threshold_days is not None:
        records = filter_dormant_by_threshold(records, threshold_days)

    default_field, default_direction = DEFAULT_SORTS[view]
    if sort_field is None:
        field, direction = default_field, sort_direction or default_direction
    else:
        field, direction = sort_field, sort_direction or SortDirection.DESC

    state = TableState(
        search=search,
        category=category,
        status=status,
        min_quotes=min_quotes,
        sort_field=field,
        sort_direction=direction,
    )
    rows = apply_table_view(records, state)

    logger.debug(f"GET /partners view={view.value} -> {len(rows)}/{len(records)} rows")

    return PartnerListResponse(
        view=view,
        total=len(records),
        count=len(rows),
        partners=[row.model_dump(mode="json", by_alias=True) for row in rows],
        categories=available_categories(records),
    )


# =============================================================================
# GET /partners/categories
# =============================================================================


@router.get("/categories", response_model=CategoryBreakdownResponse)
def get_categories(
    session: DashboardSessionDep,
    view: PartnerView = Query(default=PartnerView.PARTNERS, description="Dashboard view"),
) -> CategoryBreakdownResponse:
    """Category filter options and the per-category partner counts of a view."""
    records = session.data.view(view)
    return CategoryBreakdownResponse(
        options=available_categories(records),
        distribution=category_distribution(records),
    )


# =============================================================================
# GET /partners/{name}
# =============================================================================


@router.get("/{name}", response_model=PartnerDetail)
def get_partner_detail(
    name: str,
    session: DashboardSessionDep,
    settings: SettingsDep,
) -> PartnerDetail:
    """
    Detail panel summary of one partner.

    Raises:
        HTTPException 404: If no partner of the current data has this name.
    """
    partner = find_partner(session.data.partners, name)
    if partner is None:
        logger.info(f"Partner not found: {name}")
        raise HTTPException(status_code=404, detail=f"Partner '{name}' not found")

    return build_partner_detail(partner, settings.company_average_rate)
