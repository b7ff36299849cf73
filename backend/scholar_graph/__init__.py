"""Scholar Graph API: HTTP access to an academic social network stored in Neo4j."""
