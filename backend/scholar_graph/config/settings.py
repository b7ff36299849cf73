"""
Application Configuration

This module provides type-safe configuration loading using Pydantic settings.
Environment variables are loaded from .env file and validated.

Fixed parameters of the analytical queries (result limits, trend windows)
live in config/default.yaml and are loaded separately with load_yaml_config().

Usage:
    from scholar_graph.config import settings

    # Access settings
    uri = settings.NEO4J_URI
    limit = settings.get_rate_limit(RateLimitType.EXPORT)
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings

from scholar_graph.enums.api import RateLimitType


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Scholar Graph API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]

    # Neo4j
    NEO4J_URI: str = "bolt://localhost:7687"
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = ""
    NEO4J_DATABASE: str = "neo4j"

    # Rate limiting (SlowAPI limit strings)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_GRAPH_WRITE: str = "60/minute"
    RATE_LIMIT_ANALYTICS: str = "30/minute"
    RATE_LIMIT_EXPORT: str = "10/minute"

    # Minimum number of properties a new relationship must carry
    RELATION_MIN_PROPERTIES: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def get_rate_limit(self, rate_limit_type: RateLimitType) -> str:
        """Return the SlowAPI limit string for an endpoint category."""
        limits = {
            RateLimitType.DEFAULT: self.RATE_LIMIT_DEFAULT,
            RateLimitType.GRAPH_WRITE: self.RATE_LIMIT_GRAPH_WRITE,
            RateLimitType.ANALYTICS: self.RATE_LIMIT_ANALYTICS,
            RateLimitType.EXPORT: self.RATE_LIMIT_EXPORT,
        }
        return limits.get(rate_limit_type, self.RATE_LIMIT_DEFAULT)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()


# Defaults used when config/default.yaml is missing or incomplete
DEFAULT_ANALYTICS_CONFIG: dict[str, Any] = {
    "queries_limit": 5,
    "advanced_limit": 10,
    "ranking_limit": 10,
    "research_trends_limit": 5,
    "trending_since": "2024-01-01",
    "research_trends_months": 6,
}


@lru_cache()
def load_yaml_config() -> dict[str, Any]:
    """Load application configuration from config/default.yaml."""
    config_path = Path(__file__).parent.parent.parent.parent / "config" / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def get_analytics_config() -> dict[str, Any]:
    """
    Analytical query parameters, YAML values layered over the defaults.

    Returns:
        Dict with queries_limit, advanced_limit, ranking_limit,
        research_trends_limit, trending_since and research_trends_months.
    """
    return {**DEFAULT_ANALYTICS_CONFIG, **(load_yaml_config().get("analytics") or {})}

