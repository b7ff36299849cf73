"""
Analytical Queries API Router

Recommendations and rankings over the academic network.

Endpoints:
    GET /queries/recommend-publications/{user_id} - Publications in the user's interests
    GET /queries/suggest-collaborators/{user_id}  - Users with shared interests
    GET /queries/trending-categories              - Most published recent categories
    GET /queries/suggest-conferences/{user_id}    - Conferences matching interests
    GET /queries/influential-users                - Users by total publication impact
    GET /queries/publication-engagement           - Publications by comments + reactions
"""

from fastapi import APIRouter, Depends, Request

from scholar_graph.dependencies import get_analytics_service
from scholar_graph.middleware.error_handling import handle_endpoint_errors
from scholar_graph.middleware.rate_limit import limit_analytics
from scholar_graph.models.analytics import (
    InfluentialUsersByImpactResponse,
    PublicationEngagementResponse,
    RecommendPublicationsResponse,
    SuggestCollaboratorsResponse,
    SuggestConferencesResponse,
    TrendingCategoriesResponse,
)
from scholar_graph.services.graph import AnalyticsService

router = APIRouter(prefix="/queries", tags=["queries"])


@router.get("/recommend-publications/{user_id}", response_model=RecommendPublicationsResponse)
@limit_analytics
@handle_endpoint_errors("Recommend publications")
async def recommend_publications(
    request: Request,
    user_id: int,
    service: AnalyticsService = Depends(get_analytics_service),
) -> RecommendPublicationsResponse:
    """Publications in the user's interest categories, by impact."""
    rows = await service.recommend_publications(user_id)
    return RecommendPublicationsResponse(publications=rows)


@router.get("/suggest-collaborators/{user_id}", response_model=SuggestCollaboratorsResponse)
@limit_analytics
@handle_endpoint_errors("Suggest collaborators")
async def suggest_collaborators(
    request: Request,
    user_id: int,
    service: AnalyticsService = Depends(get_analytics_service),
) -> SuggestCollaboratorsResponse:
    """Users sharing interest categories with the user, not yet followed."""
    rows = await service.suggest_collaborators(user_id)
    return SuggestCollaboratorsResponse(collaborators=rows)


@router.get("/trending-categories", response_model=TrendingCategoriesResponse)
@limit_analytics
@handle_endpoint_errors("Trending categories")
async def trending_categories(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> TrendingCategoriesResponse:
    rows = await service.trending_categories()
    return TrendingCategoriesResponse(trends=rows)


@router.get("/suggest-conferences/{user_id}", response_model=SuggestConferencesResponse)
@limit_analytics
@handle_endpoint_errors("Suggest conferences")
async def suggest_conferences(
    request: Request,
    user_id: int,
    service: AnalyticsService = Depends(get_analytics_service),
) -> SuggestConferencesResponse:
    rows = await service.suggest_conferences(user_id)
    return SuggestConferencesResponse(conferences=rows)


@router.get("/influential-users", response_model=InfluentialUsersByImpactResponse)
@limit_analytics
@handle_endpoint_errors("Influential users by impact")
async def influential_users(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> InfluentialUsersByImpactResponse:
    """Users ranked by the summed impact of their publications."""
    rows = await service.influential_users_by_impact()
    return InfluentialUsersByImpactResponse(influential_users=rows)


@router.get("/publication-engagement", response_model=PublicationEngagementResponse)
@limit_analytics
@handle_endpoint_errors("Publication engagement")
async def publication_engagement(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> PublicationEngagementResponse:
    rows = await service.publication_engagement()
    return PublicationEngagementResponse(publications=rows)
