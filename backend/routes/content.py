"""
MedDent API - Routes Site content

Ordered collections (doctors, reviews, faqs, services, pill sections,
value items) share one CRUD shape built by content_router():
  GET    /{prefix}              public, ?active_only=true hides hidden items
  GET    /{prefix}/{id}         public
  POST   /{prefix}              admin
  PUT    /{prefix}/{id}         admin
  PATCH  /{prefix}/{id}/order   admin
  DELETE /{prefix}/{id}         admin
"""

import logging
import uuid
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from config import get_db, now_iso
from models.content import (
    DisplayOrderUpdate,
    DoctorCreate,
    DoctorUpdate,
    FAQCreate,
    FAQUpdate,
    PillSectionCreate,
    PillSectionUpdate,
    ReviewCreate,
    ReviewUpdate,
    ServiceCreate,
    ServiceUpdate,
    ValueItemCreate,
    ValueItemUpdate,
)
from routes.auth import get_current_admin

logger = logging.getLogger("content")

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")


def _bool_param(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    value = value.lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def content_router(
    prefix: str,
    collection: str,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    label: str,
    visibility_field: str = "is_active",
    filter_fields: Optional[List[str]] = None,
) -> APIRouter:
    """CRUD router for one display_order-sorted collection"""
    router = APIRouter(prefix=prefix, tags=[label])
    filter_fields = filter_fields or []

    @router.get("")
    async def list_items(request: Request, db=Depends(get_db)):
        query = {}
        if _bool_param(request.query_params.get("active_only")):
            query[visibility_field] = True
        for field in filter_fields:
            flag = _bool_param(request.query_params.get(field))
            if flag is not None:
                query[field] = flag

        items = await db[collection].find(query, {"_id": 0}) \
            .sort([("display_order", 1), ("created_at", -1)]) \
            .to_list(500)
        return {"data": items}

    @router.get("/{item_id}")
    async def get_item(item_id: str, db=Depends(get_db)):
        item = await db[collection].find_one({"id": item_id}, {"_id": 0})
        if not item:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return {"data": item}

    @router.post("", status_code=201)
    async def create_item(
        data: create_model,
        admin: dict = Depends(get_current_admin),
        db=Depends(get_db),
    ):
        item = data.model_dump(mode="json")
        item["id"] = str(uuid.uuid4())
        item["created_at"] = now_iso()
        item["updated_at"] = now_iso()

        await db[collection].insert_one(item)
        item.pop("_id", None)

        logger.info(f"[CONTENT] {label} created {item['id']} by {admin.get('email')}")
        return {"success": True, "data": item}

    @router.put("/{item_id}")
    async def update_item(
        item_id: str,
        data: update_model,
        admin: dict = Depends(get_current_admin),
        db=Depends(get_db),
    ):
        update = data.model_dump(mode="json", exclude_unset=True)
        update["updated_at"] = now_iso()

        result = await db[collection].update_one({"id": item_id}, {"$set": update})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail=f"{label} not found")

        item = await db[collection].find_one({"id": item_id}, {"_id": 0})
        return {"success": True, "data": item}

    @router.patch("/{item_id}/order")
    async def update_item_order(
        item_id: str,
        data: DisplayOrderUpdate,
        admin: dict = Depends(get_current_admin),
        db=Depends(get_db),
    ):
        result = await db[collection].update_one(
            {"id": item_id},
            {"$set": {"display_order": data.display_order, "updated_at": now_iso()}}
        )
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return {"success": True, "display_order": data.display_order}

    @router.delete("/{item_id}")
    async def delete_item(item_id: str, admin: dict = Depends(get_current_admin), db=Depends(get_db)):
        result = await db[collection].delete_one({"id": item_id})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        logger.info(f"[CONTENT] {label} deleted {item_id} by {admin.get('email')}")
        return {"success": True}

    return router


doctors_router = content_router("/doctors", "doctors", DoctorCreate, DoctorUpdate, "Doctor")
reviews_router = content_router(
    "/reviews", "reviews", ReviewCreate, ReviewUpdate, "Review",
    visibility_field="is_approved",
    filter_fields=["is_result"],
)
faqs_router = content_router("/faqs", "faqs", FAQCreate, FAQUpdate, "FAQ")
services_router = content_router("/services", "services", ServiceCreate, ServiceUpdate, "Service")
pill_sections_router = content_router(
    "/pill-sections", "pill_sections", PillSectionCreate, PillSectionUpdate, "Pill section"
)
value_items_router = content_router(
    "/value-items", "value_stacking_items", ValueItemCreate, ValueItemUpdate, "Value item"
)

routers = [
    doctors_router,
    reviews_router,
    faqs_router,
    services_router,
    pill_sections_router,
    value_items_router,
]
