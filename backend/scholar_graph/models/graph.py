"""
Graph CRUD API Models (Pydantic)

Request/response schemas for the node and relationship routes.

Property bags are free-form: callers send arbitrary keys, which become
property names verbatim. Empty filters/properties are accepted by the models
and rejected by the services with a 400, so the client sees the same error
shape whether a field is missing or empty.

Usage:
    from scholar_graph.models.graph import BulkUpdateRequest, NodeResponse
"""

from typing import Any, Optional

from pydantic import Field

from scholar_graph.models.base import MessageResponse, StrictRequest, StrictResponse

PropertyBag = dict[str, Any]


# =============================================================================
# Requests
# =============================================================================


class BulkUpdateRequest(StrictRequest):
    """Set properties on every entity matching a filter."""

    filter: Optional[PropertyBag] = Field(
        default=None, description="Equality filter, e.g. {'rol': 'estudiante'}"
    )
    properties: Optional[PropertyBag] = Field(
        default=None, description="Properties to set, e.g. {'activo': true}"
    )


class PropertyRemovalRequest(StrictRequest):
    """Remove properties from a single entity."""

    properties: Optional[list[str]] = Field(
        default=None, description="Property names to remove"
    )


class BulkPropertyRemovalRequest(StrictRequest):
    """Remove properties from every entity matching a filter."""

    filter: Optional[PropertyBag] = None
    properties: Optional[list[str]] = None


class BulkDeleteRequest(StrictRequest):
    """Delete every entity matching a filter."""

    filter: Optional[PropertyBag] = None


# =============================================================================
# Node Responses
# =============================================================================


class NodeResponse(StrictResponse):
    """A single node's properties."""

    node: PropertyBag


class NodeMutationResponse(MessageResponse):
    """Result of creating or updating one node."""

    node: PropertyBag


class NodesResponse(StrictResponse):
    """Properties of every matching node."""

    nodes: list[PropertyBag]


class AggregateResponse(StrictResponse):
    """
    Node counts.

    Each row is {"count": n}, or {"group": value, "count": n} when grouped.
    """

    data: list[PropertyBag]


# =============================================================================
# Shared Responses
# =============================================================================


class BulkMutationResponse(MessageResponse):
    """Result of a filter-based update or property removal."""

    updated_count: int


class DeleteResponse(MessageResponse):
    """Result of a delete; deleted_count is set for filter-based deletes."""

    deleted_count: Optional[int] = None


# =============================================================================
# Relationship Responses
# =============================================================================


class RelationshipMutationResponse(MessageResponse):
    """Result of creating or updating one relationship."""

    relation: PropertyBag


class RelationshipRecord(StrictResponse):
    """A relationship with the ids and labels of its endpoints."""

    type: str
    properties: PropertyBag
    start_id: Optional[Any] = None
    start_labels: list[str] = Field(default_factory=list)
    end_id: Optional[Any] = None
    end_labels: list[str] = Field(default_factory=list)


class RelationshipsResponse(StrictResponse):
    """Every matching relationship of one type."""

    relations: list[RelationshipRecord]
