"""
Common Neo4j Graph Queries

Pre-defined Cypher queries for the analytical endpoints, plus template
functions for the node and relationship CRUD statements.

Template functions take identifiers that have ALREADY been sanitized with
cypher.sanitize_identifier() and clause fragments built by the cypher
helpers; they only assemble query text.
"""

# =============================================================================
# Node Templates
# =============================================================================


def max_node_id_query(label: str) -> str:
    """Highest numeric id among nodes of a label (0 when there are none)."""
    return f"MATCH (n:{label}) RETURN coalesce(max(n.id), 0) AS max_id"


def create_node_query(labels: str) -> str:
    """Create a node with a label expression (":A:B") and a property map."""
    return f"CREATE (n{labels} $properties) RETURN n"


def find_nodes_query(label: str, where: str = "") -> str:
    """Match all nodes of a label, optionally filtered."""
    where_clause = f" WHERE {where}" if where else ""
    return f"MATCH (n:{label}){where_clause} RETURN n"


def get_node_query(label: str) -> str:
    """Match one node of a label by id."""
    return f"MATCH (n:{label} {{id: $id}}) RETURN n"


def count_nodes_query(label: str, group_by: str | None = None) -> str:
    """Count nodes of a label, optionally grouped by a property."""
    if group_by:
        return f"MATCH (n:{label}) RETURN n.{group_by} AS group, count(n) AS count"
    return f"MATCH (n:{label}) RETURN count(n) AS count"


def update_node_query(label: str, assignments: str) -> str:
    """Set properties on one node matched by id."""
    return f"MATCH (n:{label} {{id: $id}}) SET {assignments} RETURN n"


def update_nodes_query(label: str, where: str, assignments: str) -> str:
    """Set properties on every node matching a filter."""
    return (
        f"MATCH (n:{label}) WHERE {where} SET {assignments} "
        "RETURN count(n) AS updated_count"
    )


def remove_node_properties_query(label: str, removals: str) -> str:
    """Remove properties from one node matched by id."""
    return f"MATCH (n:{label} {{id: $id}}) {removals} RETURN n"


def remove_nodes_properties_query(label: str, where: str, removals: str) -> str:
    """Remove properties from every node matching a filter."""
    return (
        f"MATCH (n:{label}) WHERE {where} {removals} "
        "RETURN count(n) AS updated_count"
    )


def delete_node_query(label: str) -> str:
    """Detach-delete one node matched by id."""
    return f"MATCH (n:{label} {{id: $id}}) DETACH DELETE n"


def count_matching_nodes_query(label: str, where: str) -> str:
    """Count nodes matching a filter."""
    return f"MATCH (n:{label}) WHERE {where} RETURN count(n) AS total"


def delete_nodes_query(label: str, where: str) -> str:
    """Detach-delete every node matching a filter."""
    return f"MATCH (n:{label}) WHERE {where} DETACH DELETE n"


# =============================================================================
# Relationship Templates
# =============================================================================


def _relationship_pattern(label1: str, relation: str, label2: str) -> str:
    return f"(a:{label1} {{id: $id1}})-[r:{relation}]->(b:{label2} {{id: $id2}})"


def create_relationship_query(label1: str, relation: str, label2: str) -> str:
    """Create a directed relationship between two nodes matched by id."""
    return (
        f"MATCH (a:{label1} {{id: $id1}}), (b:{label2} {{id: $id2}}) "
        f"CREATE (a)-[r:{relation} $properties]->(b) RETURN r"
    )


def find_relationships_query(relation: str, where: str = "") -> str:
    """Match all relationships of a type, optionally filtered."""
    where_clause = f" WHERE {where}" if where else ""
    return (
        f"MATCH (a)-[r:{relation}]->(b){where_clause} "
        "RETURN r, a.id AS start_id, labels(a) AS start_labels, "
        "b.id AS end_id, labels(b) AS end_labels"
    )


def get_relationship_query(label1: str, relation: str, label2: str) -> str:
    """Match the relationship(s) of a type between two nodes."""
    return f"MATCH {_relationship_pattern(label1, relation, label2)} RETURN r"


def update_relationship_query(
    label1: str, relation: str, label2: str, assignments: str
) -> str:
    """Set properties on the relationship(s) between two nodes."""
    return (
        f"MATCH {_relationship_pattern(label1, relation, label2)} "
        f"SET {assignments} RETURN r"
    )


def update_relationships_query(relation: str, where: str, assignments: str) -> str:
    """Set properties on every relationship of a type matching a filter."""
    return (
        f"MATCH ()-[r:{relation}]->() WHERE {where} SET {assignments} "
        "RETURN count(r) AS updated_count"
    )


def remove_relationship_properties_query(
    label1: str, relation: str, label2: str, removals: str
) -> str:
    """Remove properties from the relationship(s) between two nodes."""
    return f"MATCH {_relationship_pattern(label1, relation, label2)} {removals} RETURN r"


def remove_relationships_properties_query(
    relation: str, where: str, removals: str
) -> str:
    """Remove properties from every relationship of a type matching a filter."""
    return (
        f"MATCH ()-[r:{relation}]->() WHERE {where} {removals} "
        "RETURN count(r) AS updated_count"
    )


def delete_relationship_query(label1: str, relation: str, label2: str) -> str:
    """Delete the relationship(s) of a type between two nodes."""
    return f"MATCH {_relationship_pattern(label1, relation, label2)} DELETE r"


def count_matching_relationships_query(relation: str, where: str) -> str:
    """Count relationships of a type matching a filter."""
    return f"MATCH ()-[r:{relation}]->() WHERE {where} RETURN count(r) AS total"


def delete_relationships_query(relation: str, where: str) -> str:
    """Delete every relationship of a type matching a filter."""
    return f"MATCH ()-[r:{relation}]->() WHERE {where} DELETE r"


# =============================================================================
# Recommendation Queries (per user)
# =============================================================================

RECOMMEND_PUBLICATIONS = """
MATCH (u:Usuario {id: $user_id})-[:TIENE_INTERÉS_EN]->(cat:Categoría)
      <-[:RELACIONADO_CON]-(p:Publicación)
RETURN p AS publication, cat AS category
ORDER BY p.impacto DESC
LIMIT $limit
"""

SUGGEST_COLLABORATORS = """
MATCH (u:Usuario {id: $user_id})-[:TIENE_INTERÉS_EN]->(cat:Categoría)
      <-[:TIENE_INTERÉS_EN]-(other:Usuario)
WHERE NOT (u)-[:SIGUE_A]->(other) AND u <> other
RETURN other AS user, count(cat) AS common_interests
ORDER BY common_interests DESC
LIMIT $limit
"""

SUGGEST_CONFERENCES = """
MATCH (u:Usuario {id: $user_id})-[:TIENE_INTERÉS_EN]->(cat:Categoría)
      <-[:RELACIONADO_CON]-(p:Publicación)-[:PRESENTADA_EN]->(conf:Conferencia)
RETURN conf AS conference, count(p) AS relevance
ORDER BY relevance DESC
LIMIT $limit
"""

PERSONALIZED_RECOMMENDATIONS = """
MATCH (u:Usuario {id: $user_id})-[:TIENE_INTERÉS_EN]->(c:Categoría)
      <-[:RELACIONADO_CON]-(p:Publicación)
RETURN p.título AS publication, count(c) AS relevance
ORDER BY relevance DESC
LIMIT $limit
"""

# =============================================================================
# Ranking Queries
# =============================================================================

TRENDING_CATEGORIES = """
MATCH (p:Publicación)-[:RELACIONADO_CON]->(cat:Categoría)
WHERE p.fecha_publicación > date($since)
RETURN cat.nombre AS category, count(p) AS publication_count
ORDER BY publication_count DESC
LIMIT $limit
"""

INFLUENTIAL_USERS_BY_IMPACT = """
MATCH (u:Usuario)-[:PUBLICA]->(p:Publicación)
RETURN u.nombre AS name, sum(p.impacto) AS total_impact
ORDER BY total_impact DESC
LIMIT $limit
"""

INFLUENTIAL_USERS_BY_FOLLOWERS = """
MATCH (u:Usuario)<-[:SIGUE_A]-(follower)
RETURN u.nombre AS name, count(follower) AS influence
ORDER BY influence DESC
LIMIT $limit
"""

PUBLICATION_ENGAGEMENT = """
MATCH (p:Publicación)
OPTIONAL MATCH (p)<-[c:COMENTA_EN]-()
OPTIONAL MATCH (p)<-[r:REACCIONA_A]-()
RETURN p.título AS title,
       count(DISTINCT c) AS comments,
       count(DISTINCT r) AS reactions,
       count(DISTINCT c) + count(DISTINCT r) AS engagement
ORDER BY engagement DESC
LIMIT $limit
"""

NETWORK_SUMMARY = """
MATCH (n)
RETURN 'node' AS type, labels(n)[0] AS name, count(n) AS count
UNION ALL
MATCH ()-[r]->()
RETURN 'relationship' AS type, type(r) AS name, count(r) AS count
"""

# Reputation = citations + 2 * reactions + 3 * comments
PUBLICATION_RANKING = """
MATCH (p:Publicación)
OPTIONAL MATCH (p)<-[reaction:REACCIONA_A]-(:Usuario)
OPTIONAL MATCH (p)<-[comment:COMENTA_EN]-(:Usuario)
WITH p,
     coalesce(p.citas, 0) AS citations,
     count(DISTINCT reaction) AS reactions,
     count(DISTINCT comment) AS comments
RETURN p.título AS title,
       citations,
       reactions,
       comments,
       citations + reactions * 2 + comments * 3 AS reputation
ORDER BY reputation DESC
LIMIT $limit
"""

RESEARCH_TRENDS = """
MATCH (p:Publicación)-[:RELACIONADO_CON]->(c:Categoría)
WHERE p.fecha_publicación >= date() - duration({months: $months})
RETURN c.nombre AS category, count(p) AS recent_publications
ORDER BY recent_publications DESC
LIMIT $limit
"""

# =============================================================================
# Export Queries
# =============================================================================

EXPORT_USERS = """
MATCH (u:Usuario)
RETURN u.nombre AS name,
       u.rol AS role,
       u.universidad AS university,
       u.reputación AS reputation
"""

# =============================================================================
# Health
# =============================================================================

PING = "RETURN 1 AS ok"
