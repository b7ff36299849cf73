"""
Node API Router

CRUD operations on label-qualified nodes.

Endpoints:
    POST   /nodes/{label}                     - Create a node
    POST   /nodes/create/{labels}             - Create a node with several labels
    GET    /nodes/read/{label}                - List nodes (query-string filters)
    GET    /nodes/read/{label}/{node_id}      - Get one node
    GET    /nodes/aggregate/{label}           - Count nodes, optionally grouped
    PATCH  /nodes/update/{label}/{node_id}    - Add properties to one node
    PATCH  /nodes/update/{label}              - Add properties to matching nodes
    PUT    /nodes/update/{label}/{node_id}    - Update properties of one node
    PUT    /nodes/update/{label}              - Update properties of matching nodes
    DELETE /nodes/properties/{label}/{node_id} - Remove properties from one node
    DELETE /nodes/properties/{label}          - Remove properties from matching nodes
    DELETE /nodes/{label}/{node_id}           - Delete one node
    DELETE /nodes/{label}                     - Delete matching nodes

Models are defined in scholar_graph.models.graph.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from scholar_graph.dependencies import get_node_service
from scholar_graph.enums import UpdateMode
from scholar_graph.middleware.error_handling import handle_endpoint_errors
from scholar_graph.middleware.rate_limit import limit_graph_write
from scholar_graph.models.base import ErrorDetail
from scholar_graph.models.graph import (
    AggregateResponse,
    BulkDeleteRequest,
    BulkMutationResponse,
    BulkPropertyRemovalRequest,
    BulkUpdateRequest,
    DeleteResponse,
    NodeMutationResponse,
    NodeResponse,
    NodesResponse,
    PropertyBag,
    PropertyRemovalRequest,
)
from scholar_graph.services.graph import NodeService
from scholar_graph.services.graph.nodes import require_label, require_labels

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/nodes",
    tags=["nodes"],
    responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}},
)

UPDATE_MESSAGES = {
    UpdateMode.MERGE: "Properties added successfully.",
    UpdateMode.REPLACE: "Properties updated successfully.",
}

BULK_UPDATE_MESSAGES = {
    UpdateMode.MERGE: "Properties added to {count} nodes.",
    UpdateMode.REPLACE: "Properties updated on {count} nodes.",
}


# =============================================================================
# Create
# =============================================================================


@router.post(
    "/create/{labels}", response_model=NodeMutationResponse, status_code=status.HTTP_201_CREATED
)
@limit_graph_write
@handle_endpoint_errors("Create multi-label node")
async def create_node_with_labels(
    request: Request,
    labels: str,
    properties: Optional[PropertyBag] = Body(None),
    service: NodeService = Depends(get_node_service),
) -> NodeMutationResponse:
    """
    Create a node carrying every label in a comma-separated list.

    The id counter is taken from the first valid label.
    """
    node = await service.create_node(require_labels(labels), properties)
    return NodeMutationResponse(message="Node created successfully.", node=node)


@router.post(
    "/{label}", response_model=NodeMutationResponse, status_code=status.HTTP_201_CREATED
)
@limit_graph_write
@handle_endpoint_errors("Create node")
async def create_node(
    request: Request,
    label: str,
    properties: Optional[PropertyBag] = Body(None),
    service: NodeService = Depends(get_node_service),
) -> NodeMutationResponse:
    """
    Create a node with the next id for its label.

    The JSON body is the property bag; an `id` in it is overwritten.
    """
    node = await service.create_node([require_label(label)], properties)
    return NodeMutationResponse(message="Node created successfully.", node=node)


# =============================================================================
# Read
# =============================================================================


@router.get("/read/{label}", response_model=NodesResponse)
@handle_endpoint_errors("Read nodes")
async def read_nodes(
    request: Request,
    label: str,
    service: NodeService = Depends(get_node_service),
) -> NodesResponse:
    """
    List nodes of a label.

    Every query-string pair is an equality filter; "true"/"false" and
    numeric strings are converted before matching.
    """
    nodes = await service.find_nodes(label, dict(request.query_params))
    return NodesResponse(nodes=nodes)


@router.get("/read/{label}/{node_id}", response_model=NodeResponse)
@handle_endpoint_errors("Read node")
async def read_node(
    label: str,
    node_id: int,
    service: NodeService = Depends(get_node_service),
) -> NodeResponse:
    node = await service.get_node(label, node_id)
    return NodeResponse(node=node)


@router.get("/aggregate/{label}", response_model=AggregateResponse)
@handle_endpoint_errors("Aggregate nodes")
async def aggregate_nodes(
    label: str,
    group_by: Optional[str] = Query(None, alias="groupBy", description="Property to group by"),
    service: NodeService = Depends(get_node_service),
) -> AggregateResponse:
    """Count nodes of a label, optionally grouped by one property."""
    data = await service.aggregate(label, group_by)
    return AggregateResponse(data=data)


# =============================================================================
# Update
# =============================================================================


async def _update_one(
    service: NodeService,
    label: str,
    node_id: int,
    properties: Optional[dict[str, Any]],
    mode: UpdateMode,
) -> NodeMutationResponse:
    node = await service.update_node(label, node_id, properties, mode)
    return NodeMutationResponse(message=UPDATE_MESSAGES[mode], node=node)


async def _update_many(
    service: NodeService, label: str, body: BulkUpdateRequest, mode: UpdateMode
) -> BulkMutationResponse:
    count = await service.update_nodes(label, body.filter, body.properties, mode)
    return BulkMutationResponse(
        message=BULK_UPDATE_MESSAGES[mode].format(count=count), updated_count=count
    )


@router.patch("/update/{label}/{node_id}", response_model=NodeMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Patch node")
async def patch_node(
    request: Request,
    label: str,
    node_id: int,
    properties: Optional[PropertyBag] = Body(None),
    service: NodeService = Depends(get_node_service),
) -> NodeMutationResponse:
    """Add or overwrite the given properties on one node."""
    return await _update_one(service, label, node_id, properties, UpdateMode.MERGE)


@router.patch("/update/{label}", response_model=BulkMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Patch nodes")
async def patch_nodes(
    request: Request,
    label: str,
    body: BulkUpdateRequest,
    service: NodeService = Depends(get_node_service),
) -> BulkMutationResponse:
    """Add properties to every node matching `filter`."""
    return await _update_many(service, label, body, UpdateMode.MERGE)


@router.put("/update/{label}/{node_id}", response_model=NodeMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Update node")
async def put_node(
    request: Request,
    label: str,
    node_id: int,
    properties: Optional[PropertyBag] = Body(None),
    service: NodeService = Depends(get_node_service),
) -> NodeMutationResponse:
    """Update the given properties on one node; other properties are kept."""
    return await _update_one(service, label, node_id, properties, UpdateMode.REPLACE)


@router.put("/update/{label}", response_model=BulkMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Update nodes")
async def put_nodes(
    request: Request,
    label: str,
    body: BulkUpdateRequest,
    service: NodeService = Depends(get_node_service),
) -> BulkMutationResponse:
    return await _update_many(service, label, body, UpdateMode.REPLACE)


# =============================================================================
# Property Removal
# =============================================================================
# Declared before the DELETE /{label} routes so "properties" is never taken
# for a label.


@router.delete("/properties/{label}/{node_id}", response_model=NodeMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Remove node properties")
async def remove_node_properties(
    request: Request,
    label: str,
    node_id: int,
    body: PropertyRemovalRequest,
    service: NodeService = Depends(get_node_service),
) -> NodeMutationResponse:
    node = await service.remove_properties(label, node_id, body.properties)
    removed = ", ".join(body.properties or [])
    return NodeMutationResponse(message=f"Properties removed: {removed}.", node=node)


@router.delete("/properties/{label}", response_model=BulkMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Remove properties from nodes")
async def remove_nodes_properties(
    request: Request,
    label: str,
    body: BulkPropertyRemovalRequest,
    service: NodeService = Depends(get_node_service),
) -> BulkMutationResponse:
    count = await service.remove_properties_matching(label, body.filter, body.properties)
    return BulkMutationResponse(
        message=f"Properties removed from {count} nodes.", updated_count=count
    )


# =============================================================================
# Delete
# =============================================================================


@router.delete(
    "/{label}/{node_id}", response_model=DeleteResponse, response_model_exclude_none=True
)
@limit_graph_write
@handle_endpoint_errors("Delete node")
async def delete_node(
    request: Request,
    label: str,
    node_id: int,
    service: NodeService = Depends(get_node_service),
) -> DeleteResponse:
    """Delete one node together with its relationships."""
    await service.delete_node(label, node_id)
    return DeleteResponse(message=f"Node {node_id} deleted successfully.")


@router.delete("/{label}", response_model=DeleteResponse)
@limit_graph_write
@handle_endpoint_errors("Delete nodes")
async def delete_nodes(
    request: Request,
    label: str,
    body: BulkDeleteRequest,
    service: NodeService = Depends(get_node_service),
) -> DeleteResponse:
    """Delete every node matching `filter`, together with its relationships."""
    count = await service.delete_nodes(label, body.filter)
    return DeleteResponse(message=f"{count} nodes deleted successfully.", deleted_count=count)
