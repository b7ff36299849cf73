"""
Analytics API Models (Pydantic)

Response schemas for the fixed analytical queries, rankings and trends.
"""

from typing import Any, Optional

from pydantic import Field

from scholar_graph.enums.graph import SummaryEntryType
from scholar_graph.models.base import StrictResponse


# =============================================================================
# Recommendations
# =============================================================================


class PublicationRecommendation(StrictResponse):
    """Publication in one of the user's interest categories."""

    publication: dict[str, Any]
    category: dict[str, Any]


class RecommendPublicationsResponse(StrictResponse):
    publications: list[PublicationRecommendation]


class CollaboratorSuggestion(StrictResponse):
    """User sharing interests with the requester, not yet followed."""

    user: dict[str, Any]
    common_interests: int


class SuggestCollaboratorsResponse(StrictResponse):
    collaborators: list[CollaboratorSuggestion]


class ConferenceSuggestion(StrictResponse):
    """Conference where publications in the user's categories were presented."""

    conference: dict[str, Any]
    relevance: int


class SuggestConferencesResponse(StrictResponse):
    conferences: list[ConferenceSuggestion]


class PersonalizedRecommendation(StrictResponse):
    publication: Optional[str] = Field(None, description="Publication title")
    relevance: int


class PersonalizedRecommendationsResponse(StrictResponse):
    recommendations: list[PersonalizedRecommendation]


# =============================================================================
# Rankings
# =============================================================================


class CategoryTrend(StrictResponse):
    category: Optional[str] = None
    publication_count: int


class TrendingCategoriesResponse(StrictResponse):
    trends: list[CategoryTrend]


class UserImpact(StrictResponse):
    """User ranked by summed impact of their publications."""

    name: Optional[str] = None
    total_impact: int | float


class UserInfluence(StrictResponse):
    """User ranked by follower count."""

    name: Optional[str] = None
    influence: int


class InfluentialUsersByImpactResponse(StrictResponse):
    influential_users: list[UserImpact]


class InfluentialUsersByFollowersResponse(StrictResponse):
    influential_users: list[UserInfluence]


class PublicationEngagement(StrictResponse):
    title: Optional[str] = None
    comments: int
    reactions: int
    engagement: int


class PublicationEngagementResponse(StrictResponse):
    publications: list[PublicationEngagement]


class NetworkSummaryEntry(StrictResponse):
    type: SummaryEntryType
    name: Optional[str] = None
    count: int


class NetworkSummaryResponse(StrictResponse):
    network_summary: list[NetworkSummaryEntry]


class PublicationRanking(StrictResponse):
    """Publication scored as citations + 2 * reactions + 3 * comments."""

    title: Optional[str] = None
    citations: int | float
    reactions: int
    comments: int
    reputation: int | float


class PublicationRankingResponse(StrictResponse):
    publications: list[PublicationRanking]


class ResearchTrend(StrictResponse):
    category: Optional[str] = None
    recent_publications: int


class ResearchTrendsResponse(StrictResponse):
    trends: list[ResearchTrend]
