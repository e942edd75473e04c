"""FastAPI router for admin-user management endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from nrfdesk.admin_users.models import AdminUserCreate, AdminUserUpdate
from nrfdesk.admin_users.service import AdminUserService
from nrfdesk.auth.errors import AdminUserError
from nrfdesk.auth.middleware import require_admin

router = APIRouter(prefix="/api/admin-users", dependencies=[require_admin()])

_STATUS_BY_CODE = {
    "ADMIN_USER_NOT_FOUND": 404,
    "DUPLICATE_EMAIL": 409,
}


def _service(request: Request) -> AdminUserService:
    service = getattr(request.app.state, "admin_user_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Admin user service not available")
    return service


def _http_error(exc: AdminUserError) -> HTTPException:
    return HTTPException(status_code=_STATUS_BY_CODE.get(exc.code, 400), detail=exc.message)


@router.get("")
async def list_admin_users(
    request: Request,
    search: str = "",
    page: int = Query(1, ge=1),
    take: int | None = Query(None, ge=1),
) -> dict[str, Any]:
    try:
        result = await _service(request).list_users(search=search, page=page, take=take)
    except AdminUserError as exc:
        raise _http_error(exc)
    return result.model_dump(mode="json")


@router.post("", status_code=201)
async def create_admin_user(body: AdminUserCreate, request: Request) -> dict[str, Any]:
    try:
        user = await _service(request).create(body.email, body.password)
    except AdminUserError as exc:
        raise _http_error(exc)
    return user.model_dump(mode="json")


@router.get("/{user_id}")
async def get_admin_user(user_id: str, request: Request) -> dict[str, Any]:
    try:
        user = await _service(request).get(user_id)
    except AdminUserError as exc:
        raise _http_error(exc)
    return user.model_dump(mode="json")


@router.put("/{user_id}")
async def update_admin_user(
    user_id: str, body: AdminUserUpdate, request: Request
) -> dict[str, Any]:
    try:
        user = await _service(request).update(user_id, email=body.email, password=body.password)
    except AdminUserError as exc:
        raise _http_error(exc)
    return user.model_dump(mode="json")


@router.delete("/{user_id}")
async def delete_admin_user(user_id: str, request: Request) -> JSONResponse:
    try:
        await _service(request).delete(user_id)
    except AdminUserError as exc:
        raise _http_error(exc)
    return JSONResponse({"message": "Admin user deleted successfully"})
