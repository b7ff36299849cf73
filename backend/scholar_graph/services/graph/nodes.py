"""
Node Service

CRUD operations on label-qualified nodes.

Every node carries an integer `id` property assigned at creation as
(highest existing id of the primary label) + 1. The read and the create run
in one explicit write transaction; concurrent creators can still be assigned
the same id.

Usage:
    service = NodeService(neo4j_client)
    node = await service.create_node(["Usuario"], {"nombre": "Ana"})
    nodes = await service.find_nodes("Usuario", {"rol": "estudiante"})
    count = await service.update_nodes("Usuario", {"rol": "estudiante"}, {"activo": True})
"""

import logging
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
    label_expression,
    parse_labels,
    sanitize_identifier,
)
from scholar_graph.services.graph.queries import (
    count_matching_nodes_query,
    count_nodes_query,
    create_node_query,
    delete_node_query,
    delete_nodes_query,
    find_nodes_query,
    get_node_query,
    max_node_id_query,
    remove_node_properties_query,
    remove_nodes_properties_query,
    update_node_query,
    update_nodes_query,
)

logger = logging.getLogger(__name__)

# Parameter-name prefixes for queries that bind both a filter and a property bag
FILTER_PREFIX = "filter_"
PROPERTY_PREFIX = "prop_"


# =============================================================================
# Input Validation
# =============================================================================


def require_label(raw: str) -> str:
    """Sanitize a label from the path, rejecting an empty result."""
    label = sanitize_identifier(raw)
    if not label:
        raise BadRequestError("A valid label is required.")
    return label


def require_labels(raw: str) -> list[str]:
    """Parse a comma-separated label list, rejecting it if nothing survives."""
    labels = parse_labels(raw)
    if not labels:
        raise BadRequestError("At least one valid label is required.")
    return labels


def require_mapping(mapping: Optional[Mapping[str, Any]], message: str) -> dict[str, Any]:
    """Reject a missing or empty property bag / filter."""
    if not mapping:
        raise BadRequestError(message)
    return dict(mapping)


def require_keys(keys: Optional[Sequence[str]], message: str) -> list[str]:
    """Reject a missing or empty list of property names."""
    if not keys:
        raise BadRequestError(message)
    return list(keys)


# =============================================================================
# Transaction Functions
# =============================================================================


async def _create_with_next_id(
    tx: AsyncTransaction,
    labels: Sequence[str],
    properties: dict[str, Any],
) -> dict[str, Any]:
    record = await fetch_single(tx, max_node_id_query(labels[0]))
    max_id = record["max_id"] if record else 0
    properties = {**properties, "id": int(max_id or 0) + 1}

    record = await fetch_single(
        tx, create_node_query(label_expression(labels)), {"properties": properties}
    )
    return record["n"]


async def _delete_if_exists(
    tx: AsyncTransaction, label: str, node_id: int
) -> bool:
    if await fetch_single(tx, get_node_query(label), {"id": node_id}) is None:
        return False
    await tx.run(delete_node_query(label), {"id": node_id})
    return True


async def _delete_matching(
    tx: AsyncTransaction, label: str, where: str, params: dict[str, Any]
) -> int:
    record = await fetch_single(tx, count_matching_nodes_query(label, where), params)
    total = record["total"] if record else 0
    if total:
        await tx.run(delete_nodes_query(label, where), params)
    return total


# =============================================================================
# Service
# =============================================================================


class NodeService:
    """
    Service for node CRUD operations.

    Labels are passed in raw and sanitized here; property keys are used
    verbatim. Methods return plain property dicts.
    """

    def __init__(self, neo4j_client: Neo4jClient) -> None:
        self.neo4j = neo4j_client

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def create_node(
        self, labels: Sequence[str], properties: Optional[Mapping[str, Any]]
    ) -> dict[str, Any]:
        """
        Create a node with the next id of its first label.

        Args:
            labels: Sanitized, non-empty labels; the first one drives the id
            properties: Property bag; any `id` in it is overwritten

        Returns:
            The created node's properties, including `id`
        """
        props = require_mapping(properties, "Node properties are required.")
        node = await self.neo4j.execute_write(_create_with_next_id, list(labels), props)
        logger.info(f"Created node {label_expression(labels)} with id {node.get('id')}")
        return node

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    async def find_nodes(
        self, raw_label: str, filters: Optional[Mapping[str, Any]] = None
    ) -> list[dict[str, Any]]:
        """
        List nodes of a label, filtered by coerced query-string values.

        Args:
            raw_label: Label from the path
            filters: Query-string pairs; values are coerced with
                coerce_query_value before binding
        """
        label = require_label(raw_label)
        where, params = "", {}
        if filters:
            coerced = {key: coerce_query_value(value) for key, value in filters.items()}
            where, params = build_conditions("n", coerced)

        rows = await self.neo4j.run_query(find_nodes_query(label, where), params)
        return [row["n"] for row in rows]

    async def get_node(self, raw_label: str, node_id: int) -> dict[str, Any]:
        """Return one node's properties; NotFoundError if it does not exist."""
        label = require_label(raw_label)
        row = await self.neo4j.run_single(get_node_query(label), {"id": node_id})
        if row is None:
            raise NotFoundError("Node not found.")
        return row["n"]

    async def aggregate(
        self, raw_label: str, group_by: Optional[str] = None
    ) -> list[dict[str, Any]]:
        """
        Count nodes of a label, optionally grouped by one property.

        The group-by property is interpolated into the query, so it is
        sanitized like a label.
        """
        label = require_label(raw_label)
        group_field = None
        if group_by is not None:
            group_field = sanitize_identifier(group_by)
            if not group_field:
                raise BadRequestError("groupBy must be a valid property name.")

        return await self.neo4j.run_query(count_nodes_query(label, group_field))

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def update_node(
        self,
        raw_label: str,
        node_id: int,
        properties: Optional[Mapping[str, Any]],
        mode: UpdateMode = UpdateMode.MERGE,
    ) -> dict[str, Any]:
        """
        Set the given properties on one node.

        PATCH and PUT share this path: only the listed properties change.

        Returns:
            The node's properties after the update
        """
        label = require_label(raw_label)
        props = require_mapping(properties, "Properties to set are required.")
        assignments, params = build_assignments("n", props, prefix=PROPERTY_PREFIX)

        row = await self.neo4j.run_single(
            update_node_query(label, assignments), {"id": node_id, **params}
        )
        if row is None:
            raise NotFoundError("Node not found.")

        logger.info(f"Updated node :{label} {node_id} ({mode.value}): {sorted(props)}")
        return row["n"]

    async def update_nodes(
        self,
        raw_label: str,
        filter: Optional[Mapping[str, Any]],
        properties: Optional[Mapping[str, Any]],
        mode: UpdateMode = UpdateMode.MERGE,
    ) -> int:
        """
        Set the given properties on every node matching `filter`.

        Returns:
            Number of nodes updated (possibly zero)
        """
        label = require_label(raw_label)
        props = require_mapping(properties, "Properties to set are required.")
        conditions = require_mapping(
            filter, "At least one filter is required to update multiple nodes."
        )
        where, filter_params = build_conditions("n", conditions, prefix=FILTER_PREFIX)
        assignments, prop_params = build_assignments("n", props, prefix=PROPERTY_PREFIX)

        row = await self.neo4j.run_single(
            update_nodes_query(label, where, assignments),
            {**filter_params, **prop_params},
        )
        updated = row["updated_count"] if row else 0
        logger.info(f"Updated {updated} :{label} nodes ({mode.value})")
        return updated

    async def remove_properties(
        self, raw_label: str, node_id: int, keys: Optional[Sequence[str]]
    ) -> dict[str, Any]:
        """
        Remove properties from one node.

        Returns:
            The node's remaining properties
        """
        label = require_label(raw_label)
        names = require_keys(keys, "Properties to remove are required.")

        row = await self.neo4j.run_single(
            remove_node_properties_query(label, build_removals("n", names)),
            {"id": node_id},
        )
        if row is None:
            raise NotFoundError("Node not found.")
        return row["n"]

    async def remove_properties_matching(
        self,
        raw_label: str,
        filter: Optional[Mapping[str, Any]],
        keys: Optional[Sequence[str]],
    ) -> int:
        """Remove properties from every node matching `filter`; returns the count."""
        label = require_label(raw_label)
        names = require_keys(keys, "Properties to remove are required.")
        conditions = require_mapping(
            filter, "At least one filter is required to remove properties from multiple nodes."
        )
        where, params = build_conditions("n", conditions)

        row = await self.neo4j.run_single(
            remove_nodes_properties_query(label, where, build_removals("n", names)),
            params,
        )
        return row["updated_count"] if row else 0

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete_node(self, raw_label: str, node_id: int) -> None:
        """
        Detach-delete one node.

        Raises:
            NotFoundError: If no node of that label has the id
        """
        label = require_label(raw_label)
        deleted = await self.neo4j.execute_write(_delete_if_exists, label, node_id)
        if not deleted:
            raise NotFoundError("Node not found.")
        logger.info(f"Deleted node :{label} {node_id}")

    async def delete_nodes(
        self, raw_label: str, filter: Optional[Mapping[str, Any]]
    ) -> int:
        """
        Detach-delete every node matching `filter`.

        Returns:
            Number of nodes deleted

        Raises:
            NotFoundError: If nothing matches
        """
        label = require_label(raw_label)
        conditions = require_mapping(
            filter, "At least one filter is required to delete nodes."
        )
        where, params = build_conditions("n", conditions)

        total = await self.neo4j.execute_write(_delete_matching, label, where, params)
        if total == 0:
            raise NotFoundError("No nodes matched the given filter.")

        logger.info(f"Deleted {total} :{label} nodes")
        return total
