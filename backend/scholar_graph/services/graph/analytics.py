"""
Analytics Service

Runs the fixed analytical queries: per-user recommendations, rankings,
engagement, network summary and research trends.

Result limits and time windows come from the `analytics` section of
config/default.yaml (see get_analytics_config()).

Usage:
    service = AnalyticsService(neo4j_client)
    publications = await service.recommend_publications(user_id=1)
    summary = await service.network_summary()
"""

import logging
from typing import Any, Optional

from scholar_graph.config import get_analytics_config
from scholar_graph.services.graph.client import Neo4jClient
from scholar_graph.services.graph.queries import (
    EXPORT_USERS,
    INFLUENTIAL_USERS_BY_FOLLOWERS,
    INFLUENTIAL_USERS_BY_IMPACT,
    NETWORK_SUMMARY,
    PERSONALIZED_RECOMMENDATIONS,
    PUBLICATION_ENGAGEMENT,
    PUBLICATION_RANKING,
    RECOMMEND_PUBLICATIONS,
    RESEARCH_TRENDS,
    SUGGEST_COLLABORATORS,
    SUGGEST_CONFERENCES,
    TRENDING_CATEGORIES,
)

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Service for the read-only analytical queries.

    Attributes:
        config: Analytical parameters (limits, trending_since,
            research_trends_months)
    """

    def __init__(
        self, neo4j_client: Neo4jClient, config: Optional[dict[str, Any]] = None
    ) -> None:
        self.neo4j = neo4j_client
        self.config = config if config is not None else get_analytics_config()

    def _limit(self, key: str, override: Optional[int] = None) -> int:
        return int(override if override is not None else self.config[key])

    # =========================================================================
    # Recommendations
    # =========================================================================

    async def recommend_publications(
        self, user_id: int, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """Top publications by impact in the user's interest categories."""
        return await self.neo4j.run_query(
            RECOMMEND_PUBLICATIONS,
            {"user_id": user_id, "limit": self._limit("queries_limit", limit)},
        )

    async def suggest_collaborators(
        self, user_id: int, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """Users sharing interests with `user_id` whom they do not follow yet."""
        return await self.neo4j.run_query(
            SUGGEST_COLLABORATORS,
            {"user_id": user_id, "limit": self._limit("queries_limit", limit)},
        )

    async def suggest_conferences(
        self, user_id: int, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """Conferences ranked by publications in the user's categories."""
        return await self.neo4j.run_query(
            SUGGEST_CONFERENCES,
            {"user_id": user_id, "limit": self._limit("queries_limit", limit)},
        )

    async def personalized_recommendations(
        self, user_id: int, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        return await self.neo4j.run_query(
            PERSONALIZED_RECOMMENDATIONS,
            {"user_id": user_id, "limit": self._limit("queries_limit", limit)},
        )

    # =========================================================================
    # Rankings
    # =========================================================================

    async def trending_categories(self, limit: Optional[int] = None) -> list[dict[str, Any]]:
        """Categories ranked by publications dated after `trending_since`."""
        return await self.neo4j.run_query(
            TRENDING_CATEGORIES,
            {
                "since": str(self.config["trending_since"]),
                "limit": self._limit("queries_limit", limit),
            },
        )

    async def influential_users_by_impact(
        self, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        return await self.neo4j.run_query(
            INFLUENTIAL_USERS_BY_IMPACT, {"limit": self._limit("queries_limit", limit)}
        )

    async def influential_users_by_followers(
        self, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        return await self.neo4j.run_query(
            INFLUENTIAL_USERS_BY_FOLLOWERS, {"limit": self._limit("advanced_limit", limit)}
        )

    async def publication_engagement(
        self, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """Publications ranked by comments + reactions."""
        return await self.neo4j.run_query(
            PUBLICATION_ENGAGEMENT, {"limit": self._limit("queries_limit", limit)}
        )

    async def network_summary(self) -> list[dict[str, Any]]:
        """Node counts per first label followed by relationship counts per type."""
        return await self.neo4j.run_query(NETWORK_SUMMARY)

    async def publication_ranking(
        self, limit: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """Publications scored as citations + 2 * reactions + 3 * comments."""
        return await self.neo4j.run_query(
            PUBLICATION_RANKING, {"limit": self._limit("ranking_limit", limit)}
        )

    async def research_trends(self, limit: Optional[int] = None) -> list[dict[str, Any]]:
        """Categories ranked by publications in the last `research_trends_months`."""
        return await self.neo4j.run_query(
            RESEARCH_TRENDS,
            {
                "months": int(self.config["research_trends_months"]),
                "limit": self._limit("research_trends_limit", limit),
            },
        )

    # =========================================================================
    # Export
    # =========================================================================

    async def export_users(self) -> list[dict[str, Any]]:
        """Name, role, university and reputation of every user."""
        rows = await self.neo4j.run_query(EXPORT_USERS)
        logger.info(f"Fetched {len(rows)} users for export")
        return rows
