"""
Relationship API Router

CRUD operations on typed, directed relationships.

A single relationship is addressed as
{label1}/{id1}/{relation}/{label2}/{id2}, from the start node to the end node.

Endpoints:
    POST   /relations/{label1}/{id1}/{relation}/{label2}/{id2}            - Create
    GET    /relations/read/{relation}                                     - List (query-string filters)
    PATCH  /relations/update/{label1}/{id1}/{relation}/{label2}/{id2}     - Add properties
    PATCH  /relations/update/{relation}                                   - Add properties to matching
    PUT    /relations/update/{label1}/{id1}/{relation}/{label2}/{id2}     - Update properties
    PUT    /relations/update/{relation}                                   - Update matching
    DELETE /relations/properties/{label1}/{id1}/{relation}/{label2}/{id2} - Remove properties
    DELETE /relations/properties/{relation}                               - Remove from matching
    DELETE /relations/{label1}/{id1}/{relation}/{label2}/{id2}            - Delete one
    DELETE /relations/{relation}                                          - Delete matching
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, status

from scholar_graph.dependencies import get_relationship_service
from scholar_graph.enums import UpdateMode
from scholar_graph.middleware.error_handling import handle_endpoint_errors
from scholar_graph.middleware.rate_limit import limit_graph_write
from scholar_graph.models.base import ErrorDetail
from scholar_graph.models.graph import (
    BulkDeleteRequest,
    BulkMutationResponse,
    BulkPropertyRemovalRequest,
    BulkUpdateRequest,
    DeleteResponse,
    PropertyBag,
    PropertyRemovalRequest,
    RelationshipMutationResponse,
    RelationshipRecord,
    RelationshipsResponse,
)
from scholar_graph.services.graph import RelationshipRef, RelationshipService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/relations",
    tags=["relations"],
    responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}},
)

SINGLE_PATH = "/{label1}/{id1}/{relation}/{label2}/{id2}"

UPDATE_MESSAGES = {
    UpdateMode.MERGE: "Properties added to the relationship.",
    UpdateMode.REPLACE: "Relationship properties updated.",
}

BULK_UPDATE_MESSAGES = {
    UpdateMode.MERGE: "Properties added to {count} relationships.",
    UpdateMode.REPLACE: "Properties updated on {count} relationships.",
}


def get_relationship_ref(
    label1: str, id1: int, relation: str, label2: str, id2: int
) -> RelationshipRef:
    """Dependency: build a sanitized relationship address from the path."""
    return RelationshipRef.parse(label1, id1, relation, label2, id2)


# =============================================================================
# Create / Read
# =============================================================================


@router.post(
    SINGLE_PATH,
    response_model=RelationshipMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
@limit_graph_write
@handle_endpoint_errors("Create relationship")
async def create_relationship(
    request: Request,
    ref: RelationshipRef = Depends(get_relationship_ref),
    properties: Optional[PropertyBag] = Body(None),
    service: RelationshipService = Depends(get_relationship_service),
) -> RelationshipMutationResponse:
    """
    Create a directed relationship between two existing nodes.

    The JSON body is the relationship's property bag and must carry at
    least RELATION_MIN_PROPERTIES entries.
    """
    relation = await service.create_relationship(ref, properties)
    return RelationshipMutationResponse(
        message="Relationship created successfully.", relation=relation
    )


@router.get("/read/{relation}", response_model=RelationshipsResponse)
@handle_endpoint_errors("Read relationships")
async def read_relationships(
    request: Request,
    relation: str,
    service: RelationshipService = Depends(get_relationship_service),
) -> RelationshipsResponse:
    """List relationships of a type; query-string pairs filter on properties."""
    rows = await service.find_relationships(relation, dict(request.query_params))
    return RelationshipsResponse(relations=[RelationshipRecord(**row) for row in rows])


# =============================================================================
# Update
# =============================================================================


async def _update_one(
    service: RelationshipService,
    ref: RelationshipRef,
    properties: Optional[PropertyBag],
    mode: UpdateMode,
) -> RelationshipMutationResponse:
    relation = await service.update_relationship(ref, properties, mode)
    return RelationshipMutationResponse(message=UPDATE_MESSAGES[mode], relation=relation)


async def _update_many(
    service: RelationshipService,
    relation: str,
    body: BulkUpdateRequest,
    mode: UpdateMode,
) -> BulkMutationResponse:
    count = await service.update_relationships(relation, body.filter, body.properties, mode)
    return BulkMutationResponse(
        message=BULK_UPDATE_MESSAGES[mode].format(count=count), updated_count=count
    )


@router.patch("/update" + SINGLE_PATH, response_model=RelationshipMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Patch relationship")
async def patch_relationship(
    request: Request,
    ref: RelationshipRef = Depends(get_relationship_ref),
    properties: Optional[PropertyBag] = Body(None),
    service: RelationshipService = Depends(get_relationship_service),
) -> RelationshipMutationResponse:
    return await _update_one(service, ref, properties, UpdateMode.MERGE)


@router.patch("/update/{relation}", response_model=BulkMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Patch relationships")
async def patch_relationships(
    request: Request,
    relation: str,
    body: BulkUpdateRequest,
    service: RelationshipService = Depends(get_relationship_service),
) -> BulkMutationResponse:
    return await _update_many(service, relation, body, UpdateMode.MERGE)


@router.put("/update" + SINGLE_PATH, response_model=RelationshipMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Update relationship")
async def put_relationship(
    request: Request,
    ref: RelationshipRef = Depends(get_relationship_ref),
    properties: Optional[PropertyBag] = Body(None),
    service: RelationshipService = Depends(get_relationship_service),
) -> RelationshipMutationResponse:
    return await _update_one(service, ref, properties, UpdateMode.REPLACE)


@router.put("/update/{relation}", response_model=BulkMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Update relationships")
async def put_relationships(
    request: Request,
    relation: str,
    body: BulkUpdateRequest,
    service: RelationshipService = Depends(get_relationship_service),
) -> BulkMutationResponse:
    return await _update_many(service, relation, body, UpdateMode.REPLACE)


# =============================================================================
# Property Removal
# =============================================================================


@router.delete("/properties" + SINGLE_PATH, response_model=RelationshipMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Remove relationship properties")
async def remove_relationship_properties(
    request: Request,
    body: PropertyRemovalRequest,
    ref: RelationshipRef = Depends(get_relationship_ref),
    service: RelationshipService = Depends(get_relationship_service),
) -> RelationshipMutationResponse:
    relation = await service.remove_properties(ref, body.properties)
    removed = ", ".join(body.properties or [])
    return RelationshipMutationResponse(
        message=f"Properties removed: {removed}.", relation=relation
    )


@router.delete("/properties/{relation}", response_model=BulkMutationResponse)
@limit_graph_write
@handle_endpoint_errors("Remove properties from relationships")
async def remove_relationships_properties(
    request: Request,
    relation: str,
    body: BulkPropertyRemovalRequest,
    service: RelationshipService = Depends(get_relationship_service),
) -> BulkMutationResponse:
    count = await service.remove_properties_matching(relation, body.filter, body.properties)
    return BulkMutationResponse(
        message=f"Properties removed from {count} relationships.", updated_count=count
    )


# =============================================================================
# Delete
# =============================================================================


@router.delete(SINGLE_PATH, response_model=DeleteResponse, response_model_exclude_none=True)
@limit_graph_write
@handle_endpoint_errors("Delete relationship")
async def delete_relationship(
    request: Request,
    ref: RelationshipRef = Depends(get_relationship_ref),
    service: RelationshipService = Depends(get_relationship_service),
) -> DeleteResponse:
    await service.delete_relationship(ref)
    return DeleteResponse(message="Relationship deleted successfully.")


@router.delete("/{relation}", response_model=DeleteResponse)
@limit_graph_write
@handle_endpoint_errors("Delete relationships")
async def delete_relationships(
    request: Request,
    relation: str,
    body: BulkDeleteRequest,
    service: RelationshipService = Depends(get_relationship_service),
) -> DeleteResponse:
    """Delete every relationship of a type matching `filter`."""
    count = await service.delete_relationships(relation, body.filter)
    return DeleteResponse(
        message=f"{count} relationships deleted successfully.", deleted_count=count
    )
