"""Kitchen resource roster routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import get_db, require_organizer
from domain.models import Organizer
from domain.schemas.resource_schemas import (
    KitchenResourceCreate,
    KitchenResourceResponse,
    KitchenResourceUpdate,
)
from services.kitchen_resource_service import KitchenResourceService

router = APIRouter(prefix="/kitchen_resources", tags=["Kitchen Resources"])
logger = logging.getLogger("potluck.api.kitchen_resources")


@router.get("", response_model=List[KitchenResourceResponse])
def list_kitchen_resources(db: Session = Depends(get_db)):
    """Roster ordered by kind, position, id"""
    resources = KitchenResourceService.list_resources(db)
    return [KitchenResourceResponse.model_validate(r) for r in resources]


@router.post(
    "", response_model=KitchenResourceResponse, status_code=status.HTTP_201_CREATED
)
def create_kitchen_resource(
    payload: KitchenResourceCreate,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    resource = KitchenResourceService.create_resource(db, payload)
    return KitchenResourceResponse.model_validate(resource)


@router.patch("/{resource_id}", response_model=KitchenResourceResponse)
def update_kitchen_resource(
    resource_id: int,
    payload: KitchenResourceUpdate,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    resource = KitchenResourceService.update_resource(db, resource_id, payload)
    return KitchenResourceResponse.model_validate(resource)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_kitchen_resource(
    resource_id: int,
    db: Session = Depends(get_db),
    organizer: Organizer = Depends(require_organizer),
):
    KitchenResourceService.delete_resource(db, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
