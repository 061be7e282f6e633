from typing import List
from sqlalchemy.orm import Session
import logging

from app.exceptions import NotFoundError
from domain.models import KitchenResource
from domain.schemas.resource_schemas import KitchenResourceCreate, KitchenResourceUpdate
from repositories import KitchenResourceRepository

logger = logging.getLogger("potluck.kitchen")


class KitchenResourceService:
    """Business logic for the kitchen / utensil / fridge / helper roster"""

    @staticmethod
    def list_resources(db: Session) -> List[KitchenResource]:
        return KitchenResourceRepository(db).get_all_ordered()

    @staticmethod
    def get_resource(db: Session, resource_id: int) -> KitchenResource:
        resource = KitchenResourceRepository(db).get_by_id(resource_id)
        if not resource:
            raise NotFoundError(f"Kitchen resource {resource_id} not found")
        return resource

    @staticmethod
    def create_resource(db: Session, payload: KitchenResourceCreate) -> KitchenResource:
        """Create a roster entry, appending it to the end of its kind when no position is given."""
        repo = KitchenResourceRepository(db)
        kind = payload.kind.value
        position = payload.position
        if position is None:
            position = repo.next_position(kind)
        resource = repo.create(
            KitchenResource(
                kind=kind,
                name=payload.name,
                position=position,
                point_person=payload.point_person,
                phone=payload.phone,
                is_driver=payload.is_driver,
            )
        )
        logger.info(f"kitchen_resource_created id={resource.id} kind={kind} position={position}")
        return resource

    @staticmethod
    def update_resource(
        db: Session, resource_id: int, payload: KitchenResourceUpdate
    ) -> KitchenResource:
        """Partial update; fields absent from the request are left untouched"""
        resource = KitchenResourceService.get_resource(db, resource_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if key == "name" and value is None:
                continue
            setattr(resource, key, value)
        resource = KitchenResourceRepository(db).update(resource)
        logger.info(f"kitchen_resource_updated id={resource_id}")
        return resource

    @staticmethod
    def delete_resource(db: Session, resource_id: int) -> None:
        """Delete one entry; sibling positions are not renumbered"""
        if not KitchenResourceRepository(db).delete(resource_id):
            raise NotFoundError(f"Kitchen resource {resource_id} not found")
        logger.info(f"kitchen_resource_deleted id={resource_id}")
