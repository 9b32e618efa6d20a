### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Links API Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Links API Endpoints

Guest-portal link directory:
- GET /links - List links (optionally one category tab)
- POST /links - Add a link at the end of the directory
- PATCH /links/{link_id} - Edit link fields
- DELETE /links/{link_id} - Remove a link
- PUT /links/order - Save a dragged sequence
- POST /links/{link_id}/move - Drop one link onto another's position
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from dashboard.dependencies import get_entity_store
from dashboard.exceptions import FormValidationError
from dashboard.middleware.rate_limit import limiter, write_rate_limit
from dashboard.schemas.entities import Link, LinkCategory
from dashboard.schemas.forms import LinkForm, LinkUpdateForm, MoveRequest, ReorderRequest
from dashboard.schemas.responses import APIResponse
from dashboard.services.entity_store import EntityStore
from dashboard.services.reorder import move_item

router = APIRouter()


@router.get(
    "",
    response_model=APIResponse[list[Link]],
    summary="List links",
    description="Links sorted by display order, optionally limited to one category",
)
async def list_links(
    category: Optional[LinkCategory] = Query(None, description="hotel | activities | contact"),
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[list[Link]]:
    return APIResponse(data=store.links_in(category))


@router.post(
    "",
    response_model=APIResponse[Link],
    status_code=status.HTTP_201_CREATED,
    summary="Add link",
)
@limiter.limit(write_rate_limit)
async def create_link(
    request: Request,
    form: LinkForm,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Link]:
    """
    Add a link to the end of the directory

    Requires the hotel to be saved first (409 otherwise).
    """
    link = (await store.add_link(form.model_dump())).unwrap()
    return APIResponse(data=link, message="Link added")


@router.put(
    "/order",
    response_model=APIResponse[list[Link]],
    summary="Reorder links",
    description="Save the new order of all links, or of one category tab",
)
@limiter.limit(write_rate_limit)
async def reorder_links(
    request: Request,
    body: ReorderRequest,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[list[Link]]:
    sequence = []
    for link_id in body.ids:
        link = store.get_link(link_id)
        if link is None:
            raise FormValidationError([{"field": "ids", "message": f"Unknown link {link_id}"}])
        sequence.append(link)

    links = (await store.reorder_links(sequence, body.category)).unwrap()
    return APIResponse(data=links, message="Order saved")


@router.post(
    "/{link_id}/move",
    response_model=APIResponse[list[Link]],
    summary="Move link",
    description="Drag-and-drop: move a link to the position of another link in the same view",
)
@limiter.limit(write_rate_limit)
async def move_link(
    request: Request,
    link_id: str,
    body: MoveRequest,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[list[Link]]:
    try:
        sequence = move_item(store.links_in(body.category), link_id, body.over_id)
    except ValueError as e:
        raise FormValidationError([{"field": "over_id", "message": str(e)}]) from e

    links = (await store.reorder_links(sequence, body.category)).unwrap()
    return APIResponse(data=links, message="Order saved")


@router.patch(
    "/{link_id}",
    response_model=APIResponse[Link],
    summary="Edit link",
)
@limiter.limit(write_rate_limit)
async def update_link(
    request: Request,
    link_id: str,
    form: LinkUpdateForm,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Link]:
    """Change only the fields sent in the body"""
    link = (await store.update_link(link_id, form.model_dump(exclude_unset=True))).unwrap()
    return APIResponse(data=link, message="Link updated")


@router.delete(
    "/{link_id}",
    response_model=APIResponse[Link],
    summary="Delete link",
)
@limiter.limit(write_rate_limit)
async def delete_link(
    request: Request,
    link_id: str,
    store: EntityStore = Depends(get_entity_store),
) -> APIResponse[Link]:
    link = (await store.delete_link(link_id)).unwrap()
    return APIResponse(data=link, message="Link deleted")
