"""
Reports API Router

User exports, publication ranking and research trends.

Endpoints:
    GET /api/export/users/csv     - Users as a CSV attachment
    GET /api/export/users/pdf     - Users as a PDF attachment
    GET /api/ranking/publications - Publications by reputation score
    GET /api/trends/research      - Most published categories in recent months
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from scholar_graph.dependencies import get_analytics_service
from scholar_graph.middleware.error_handling import handle_endpoint_errors
from scholar_graph.middleware.rate_limit import limit_analytics, limit_export
from scholar_graph.models.analytics import (
    PublicationRankingResponse,
    ResearchTrendsResponse,
)
from scholar_graph.services.export import render_users_csv, render_users_pdf
from scholar_graph.services.graph import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


# =============================================================================
# Exports
# =============================================================================


@router.get("/export/users/csv", response_class=Response)
@limit_export
@handle_endpoint_errors("Export users as CSV")
async def export_users_csv(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> Response:
    """Download every user's name, role, university and reputation as CSV."""
    rows = await service.export_users()
    return Response(
        content=render_users_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers=_attachment("users.csv"),
    )


@router.get("/export/users/pdf", response_class=Response)
@limit_export
@handle_endpoint_errors("Export users as PDF")
async def export_users_pdf(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> Response:
    """Download the user list as a PDF report."""
    rows = await service.export_users()
    return Response(
        content=render_users_pdf(rows),
        media_type="application/pdf",
        headers=_attachment("users.pdf"),
    )


# =============================================================================
# Ranking and Trends
# =============================================================================


@router.get("/ranking/publications", response_model=PublicationRankingResponse)
@limit_analytics
@handle_endpoint_errors("Publication ranking")
async def publication_ranking(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> PublicationRankingResponse:
    """
    Rank publications by reputation.

    reputation = citations + 2 * reactions + 3 * comments, where missing
    citation counts are treated as 0.
    """
    rows = await service.publication_ranking()
    return PublicationRankingResponse(publications=rows)


@router.get("/trends/research", response_model=ResearchTrendsResponse)
@limit_analytics
@handle_endpoint_errors("Research trends")
async def research_trends(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResearchTrendsResponse:
    """Categories with the most publications in the configured recent window."""
    rows = await service.research_trends()
    return ResearchTrendsResponse(trends=rows)
