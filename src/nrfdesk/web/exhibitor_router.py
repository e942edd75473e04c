"""FastAPI router for exhibitor endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request

from nrfdesk.auth.middleware import require_admin
from nrfdesk.exhibitors.models import ExhibitorQuery, ExhibitorRecord
from nrfdesk.exhibitors.service import ExhibitorService

router = APIRouter(prefix="/api/exhibitors", dependencies=[require_admin()])


def _service(request: Request) -> ExhibitorService:
    service = getattr(request.app.state, "exhibitor_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Exhibitor service not available")
    return service


@router.get("")
async def list_exhibitors(
    request: Request,
    q: str = "",
    country: str = "all",
    candidate: str = "0",
    category: str | None = None,
    fr: str = "0",
    sort: str = "name",
    page: int = 1,
    take: int = 1000,
) -> dict[str, Any]:
    """List exhibitors with computed flags and facet counts."""
    try:
        query = ExhibitorQuery(
            q=q.strip(),
            country=country,
            candidate=candidate in ("1", "true"),
            category=category or None,
            france_only=fr in ("1", "true"),
            sort=sort,
            page=page,
            take=take,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    result = await _service(request).list_exhibitors(query)
    return result.model_dump(mode="json")


@router.get("/candidates")
async def list_candidates(request: Request, take: int = 100) -> dict[str, Any]:
    """Lead candidates among the most recently crawled exhibitors."""
    items = await _service(request).candidates(take=max(take, 1))
    return {
        "count": len(items),
        "items": [item.model_dump(mode="json") for item in items],
    }


@router.get("/stats")
async def exhibitor_stats(request: Request) -> dict[str, Any]:
    stats = await _service(request).stats()
    return stats.model_dump(mode="json")


@router.post("/classify")
async def classify_exhibitor(body: ExhibitorRecord, request: Request) -> dict[str, Any]:
    """Classify an ad-hoc record without storing it."""
    return _service(request).classify_record(body).model_dump(mode="json")


@router.get("/{exhibitor_id}")
async def get_exhibitor(exhibitor_id: str, request: Request) -> dict[str, Any]:
    item = await _service(request).get(exhibitor_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Exhibitor {exhibitor_id!r} not found")
    return item.model_dump(mode="json")
