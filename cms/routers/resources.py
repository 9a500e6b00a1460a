from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from cms.domain.resources import RESOURCES, CollectionResource, SingletonResource
from cms.services.resource_service import RecordNotFoundError, ResourceService

router = APIRouter(prefix="/api", tags=["resources"])


def _service(request: Request) -> ResourceService:
    return request.app.state.resource_service


def _register_collection(name: str) -> None:
    def list_items(request: Request):
        return _service(request).list_items(name)

    def create_item(request: Request, payload: Optional[dict] = Body(None)):
        return _service(request).create(name, payload or {})

    def update_item(request: Request, item_id: str, payload: Optional[dict] = Body(None)):
        try:
            return _service(request).update(name, item_id, payload or {})
        except RecordNotFoundError:
            return JSONResponse({"error": "Not found"}, status_code=404)

    def delete_item(request: Request, item_id: str):
        _service(request).delete(name, item_id)
        return {"success": True}

    router.add_api_route(f"/{name}", list_items, methods=["GET"], name=f"list_{name}")
    router.add_api_route(f"/{name}", create_item, methods=["POST"], name=f"create_{name}")
    router.add_api_route(f"/{name}/{{item_id}}", update_item, methods=["PUT"], name=f"update_{name}")
    router.add_api_route(f"/{name}/{{item_id}}", delete_item, methods=["DELETE"], name=f"delete_{name}")


def _register_singleton(name: str) -> None:
    def read_value(request: Request):
        return _service(request).read_singleton(name)

    def update_value(request: Request, payload: Optional[dict] = Body(None)):
        return _service(request).update_singleton(name, payload or {})

    def replace_value(request: Request, payload: Optional[dict] = Body(None)):
        return _service(request).replace(name, payload or {})

    router.add_api_route(f"/{name}", read_value, methods=["GET"], name=f"read_{name}")
    router.add_api_route(f"/{name}", update_value, methods=["PUT"], name=f"update_{name}")
    router.add_api_route(f"/{name}", replace_value, methods=["POST"], name=f"replace_{name}")


for _resource in RESOURCES.values():
    if isinstance(_resource, CollectionResource):
        _register_collection(_resource.name)
    elif isinstance(_resource, SingletonResource):
        _register_singleton(_resource.name)
