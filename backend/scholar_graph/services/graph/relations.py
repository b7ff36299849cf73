"""
Relationship Service

CRUD operations on typed, directed relationships between two
label-qualified nodes.

A single relationship is addressed by both endpoints and its type:
(label1 {id: id1})-[:RELATION]->(label2 {id: id2}). Bulk operations address
every relationship of a type whose properties match a filter.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from neo4j import AsyncTransaction

from scholar_graph.enums import UpdateMode
from scholar_graph.middleware.error_handling import BadRequestError, NotFoundError
from scholar_graph.services.graph.client import Neo4jClient, fetch_single
from scholar_graph.services.graph.cypher import (
    build_assignments,
    build_conditions,
    build_removals,
    coerce_query_value,
    sanitize_identifier,
)
from scholar_graph.services.graph.nodes import (
    FILTER_PREFIX,
    PROPERTY_PREFIX,
    require_keys,
    require_label,
    require_mapping,
)
from scholar_graph.services.graph.queries import (
    count_matching_relationships_query,
    create_relationship_query,
    delete_relationship_query,
    delete_relationships_query,
    find_relationships_query,
    get_relationship_query,
    remove_relationship_properties_query,
    remove_relationships_properties_query,
    update_relationship_query,
    update_relationships_query,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationshipRef:
    """Sanitized address of one relationship between two nodes."""

    label1: str
    id1: int
    relation: str
    label2: str
    id2: int

    @classmethod
    def parse(
        cls, label1: str, id1: int, relation: str, label2: str, id2: int
    ) -> "RelationshipRef":
        """Sanitize raw path segments, rejecting empty identifiers."""
        return cls(
            label1=require_label(label1),
            id1=id1,
            relation=require_relation(relation),
            label2=require_label(label2),
            id2=id2,
        )

    @property
    def params(self) -> dict[str, int]:
        return {"id1": self.id1, "id2": self.id2}

    def __str__(self) -> str:
        return (
            f"(:{self.label1} {self.id1})-[:{self.relation}]->"
            f"(:{self.label2} {self.id2})"
        )


def require_relation(raw: str) -> str:
    """Sanitize a relationship type from the path, rejecting an empty result."""
    relation = sanitize_identifier(raw)
    if not relation:
        raise BadRequestError("A valid relationship type is required.")
    return relation


# =============================================================================
# Transaction Functions
# =============================================================================


async def _delete_if_exists(tx: AsyncTransaction, ref: RelationshipRef) -> bool:
    query = get_relationship_query(ref.label1, ref.relation, ref.label2)
    if await fetch_single(tx, query, ref.params) is None:
        return False
    await tx.run(
        delete_relationship_query(ref.label1, ref.relation, ref.label2), ref.params
    )
    return True


async def _delete_matching(
    tx: AsyncTransaction, relation: str, where: str, params: dict[str, Any]
) -> int:
    record = await fetch_single(
        tx, count_matching_relationships_query(relation, where), params
    )
    total = record["total"] if record else 0
    if total:
        await tx.run(delete_relationships_query(relation, where), params)
    return total


# =============================================================================
# Service
# =============================================================================


class RelationshipService:
    """
    Service for relationship CRUD operations.

    Attributes:
        min_properties: Minimum number of properties a new relationship must
            carry
    """

    def __init__(self, neo4j_client: Neo4jClient, min_properties: int = 3) -> None:
        self.neo4j = neo4j_client
        self.min_properties = min_properties

    async def create_relationship(
        self, ref: RelationshipRef, properties: Optional[Mapping[str, Any]]
    ) -> dict[str, Any]:
        """
        Create a directed relationship between two existing nodes.

        Raises:
            BadRequestError: If fewer than `min_properties` properties are given
            NotFoundError: If either endpoint node does not exist
        """
        props = dict(properties or {})
        if len(props) < self.min_properties:
            raise BadRequestError(
                f"A relationship requires at least {self.min_properties} properties.",
                details={"received": len(props)},
            )

        row = await self.neo4j.run_single(
            create_relationship_query(ref.label1, ref.relation, ref.label2),
            {**ref.params, "properties": props},
        )
        if row is None:
            raise NotFoundError("One or both nodes were not found.")

        logger.info(f"Created relationship {ref}")
        return row["r"]

    async def find_relationships(
        self, raw_relation: str, filters: Optional[Mapping[str, Any]] = None
    ) -> list[dict[str, Any]]:
        """
        List relationships of a type, filtered by coerced query-string values.

        Each entry carries the relationship type, its properties and the id
        and labels of both endpoints.
        """
        relation = require_relation(raw_relation)
        where, params = "", {}
        if filters:
            coerced = {key: coerce_query_value(value) for key, value in filters.items()}
            where, params = build_conditions("r", coerced)

        rows = await self.neo4j.run_query(find_relationships_query(relation, where), params)
        return [
            {
                "type": relation,
                "properties": row["r"],
                "start_id": row["start_id"],
                "start_labels": row["start_labels"],
                "end_id": row["end_id"],
                "end_labels": row["end_labels"],
            }
            for row in rows
        ]

    async def update_relationship(
        self,
        ref: RelationshipRef,
        properties: Optional[Mapping[str, Any]],
        mode: UpdateMode = UpdateMode.MERGE,
    ) -> dict[str, Any]:
        """Set properties on one relationship and return its properties."""
        props = require_mapping(properties, "Properties to set are required.")
        assignments, params = build_assignments("r", props, prefix=PROPERTY_PREFIX)

        row = await self.neo4j.run_single(
            update_relationship_query(ref.label1, ref.relation, ref.label2, assignments),
            {**ref.params, **params},
        )
        if row is None:
            raise NotFoundError("Relationship not found.")

        logger.info(f"Updated relationship {ref} ({mode.value}): {sorted(props)}")
        return row["r"]

    async def update_relationships(
        self,
        raw_relation: str,
        filter: Optional[Mapping[str, Any]],
        properties: Optional[Mapping[str, Any]],
        mode: UpdateMode = UpdateMode.MERGE,
    ) -> int:
        """Set properties on every relationship matching `filter`; returns the count."""
        relation = require_relation(raw_relation)
        props = require_mapping(properties, "Properties to set are required.")
        conditions = require_mapping(
            filter, "At least one filter is required to update multiple relationships."
        )
        where, filter_params = build_conditions("r", conditions, prefix=FILTER_PREFIX)
        assignments, prop_params = build_assignments("r", props, prefix=PROPERTY_PREFIX)

        row = await self.neo4j.run_single(
            update_relationships_query(relation, where, assignments),
            {**filter_params, **prop_params},
        )
        updated = row["updated_count"] if row else 0
        logger.info(f"Updated {updated} :{relation} relationships ({mode.value})")
        return updated

    async def remove_properties(
        self, ref: RelationshipRef, keys: Optional[Sequence[str]]
    ) -> dict[str, Any]:
        """Remove properties from one relationship; returns what remains."""
        names = require_keys(keys, "Properties to remove are required.")
        row = await self.neo4j.run_single(
            remove_relationship_properties_query(
                ref.label1, ref.relation, ref.label2, build_removals("r", names)
            ),
            ref.params,
        )
        if row is None:
            raise NotFoundError("Relationship not found.")
        return row["r"]

    async def remove_properties_matching(
        self,
        raw_relation: str,
        filter: Optional[Mapping[str, Any]],
        keys: Optional[Sequence[str]],
    ) -> int:
        relation = require_relation(raw_relation)
        names = require_keys(keys, "Properties to remove are required.")
        conditions = require_mapping(
            filter,
            "At least one filter is required to remove properties from multiple relationships.",
        )
        where, params = build_conditions("r", conditions)

        row = await self.neo4j.run_single(
            remove_relationships_properties_query(
                relation, where, build_removals("r", names)
            ),
            params,
        )
        return row["updated_count"] if row else 0

    async def delete_relationship(self, ref: RelationshipRef) -> None:
        """
        Delete one relationship.

        Raises:
            NotFoundError: If no such relationship exists
        """
        deleted = await self.neo4j.execute_write(_delete_if_exists, ref)
        if not deleted:
            raise NotFoundError("Relationship not found.")
        logger.info(f"Deleted relationship {ref}")

    async def delete_relationships(
        self, raw_relation: str, filter: Optional[Mapping[str, Any]]
    ) -> int:
        """
        Delete every relationship of a type matching `filter`.

        Raises:
            NotFoundError: If nothing matches
        """
        relation = require_relation(raw_relation)
        conditions = require_mapping(
            filter, "At least one filter is required to delete relationships."
        )
        where, params = build_conditions("r", conditions)

        total = await self.neo4j.execute_write(_delete_matching, relation, where, params)
        if total == 0:
            raise NotFoundError("No relationships matched the given filter.")

        logger.info(f"Deleted {total} :{relation} relationships")
        return total
