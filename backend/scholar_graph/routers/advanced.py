"""
Advanced Analytics API Router

Wider rankings and the network summary.

Endpoints:
    GET /advanced/influential-users                        - Users by follower count
    GET /advanced/personalized-recommendations/{user_id}   - Titles by shared categories
    GET /advanced/trending-categories                      - Most published recent categories
    GET /advanced/top-engagement-publications              - Publications by engagement
    GET /advanced/suggest-conferences/{user_id}            - Conferences matching interests
    GET /advanced/network-summary                          - Node and relationship counts
"""

from fastapi import APIRouter, Depends, Request

from scholar_graph.dependencies import get_analytics_service
from scholar_graph.middleware.error_handling import handle_endpoint_errors
from scholar_graph.middleware.rate_limit import limit_analytics
from scholar_graph.models.analytics import (
    InfluentialUsersByFollowersResponse,
    NetworkSummaryResponse,
    PersonalizedRecommendationsResponse,
    PublicationEngagementResponse,
    SuggestConferencesResponse,
    TrendingCategoriesResponse,
)
from scholar_graph.services.graph import AnalyticsService

router = APIRouter(prefix="/advanced", tags=["advanced"])


def _advanced_limit(service: AnalyticsService) -> int:
    return int(service.config["advanced_limit"])


@router.get("/influential-users", response_model=InfluentialUsersByFollowersResponse)
@limit_analytics
@handle_endpoint_errors("Influential users by followers")
async def influential_users(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> InfluentialUsersByFollowersResponse:
    """Users ranked by number of followers."""
    rows = await service.influential_users_by_followers()
    return InfluentialUsersByFollowersResponse(influential_users=rows)


@router.get(
    "/personalized-recommendations/{user_id}",
    response_model=PersonalizedRecommendationsResponse,
)
@limit_analytics
@handle_endpoint_errors("Personalized recommendations")
async def personalized_recommendations(
    request: Request,
    user_id: int,
    service: AnalyticsService = Depends(get_analytics_service),
) -> PersonalizedRecommendationsResponse:
    """Publication titles ranked by how many of the user's categories they share."""
    rows = await service.personalized_recommendations(user_id)
    return PersonalizedRecommendationsResponse(recommendations=rows)


@router.get("/trending-categories", response_model=TrendingCategoriesResponse)
@limit_analytics
@handle_endpoint_errors("Trending categories")
async def trending_categories(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> TrendingCategoriesResponse:
    rows = await service.trending_categories(limit=_advanced_limit(service))
    return TrendingCategoriesResponse(trends=rows)


@router.get("/top-engagement-publications", response_model=PublicationEngagementResponse)
@limit_analytics
@handle_endpoint_errors("Top engagement publications")
async def top_engagement_publications(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> PublicationEngagementResponse:
    rows = await service.publication_engagement(limit=_advanced_limit(service))
    return PublicationEngagementResponse(publications=rows)


@router.get("/suggest-conferences/{user_id}", response_model=SuggestConferencesResponse)
@limit_analytics
@handle_endpoint_errors("Suggest conferences")
async def suggest_conferences(
    request: Request,
    user_id: int,
    service: AnalyticsService = Depends(get_analytics_service),
) -> SuggestConferencesResponse:
    rows = await service.suggest_conferences(user_id, limit=_advanced_limit(service))
    return SuggestConferencesResponse(conferences=rows)


@router.get("/network-summary", response_model=NetworkSummaryResponse)
@limit_analytics
@handle_endpoint_errors("Network summary")
async def network_summary(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
) -> NetworkSummaryResponse:
    """Node counts per first label, then relationship counts per type."""
    rows = await service.network_summary()
    return NetworkSummaryResponse(network_summary=rows)
