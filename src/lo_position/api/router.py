"""lo_position REST endpoints.

PUT /positions/orders      — ingest on-chain orders (replace by order_id)
GET /positions             — filtered, sorted derived views + per-status counts
GET /positions/expired     — viewer's expired order ids (batch cancel)
GET /positions/{order_id}  — one derived view
"""

from fastapi import APIRouter, Query, Request

from src.lo_common.enums import (
    CategoryFilter,
    OwnershipFilter,
    SortDirection,
    SortField,
    StatusFilter,
)
from src.lo_common.response import ApiResponse, success_response
from src.lo_position.application.schemas import OrdersIngestRequest
from src.lo_position.application.service import PositionApplicationService
from src.lo_position.domain.models import PositionFilter

router = APIRouter(prefix="/positions", tags=["positions"])

_service = PositionApplicationService()


@router.put("/orders")
async def ingest_orders(body: OrdersIngestRequest, request: Request) -> ApiResponse:
    result = _service.ingest(body.orders)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_positions(
    request: Request,
    viewer: str | None = Query(None, description="Connected wallet address"),
    ownership: OwnershipFilter = Query(OwnershipFilter.ALL),
    status: StatusFilter = Query(StatusFilter.ACTIVE),
    category: CategoryFilter = Query(CategoryFilter.ALL),
    search: str = Query(""),
    sort: SortField = Query(SortField.EXPIRATION),
    direction: SortDirection = Query(SortDirection.ASC),
) -> ApiResponse:
    criteria = PositionFilter(
        ownership=ownership, status=status, category=category, search=search
    )
    result = await _service.list_positions(criteria, sort, direction, viewer)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/expired")
async def list_expired(
    request: Request,
    viewer: str | None = Query(None),
) -> ApiResponse:
    result = await _service.expired(viewer)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{order_id}")
async def get_position(order_id: int, request: Request) -> ApiResponse:
    result = await _service.get_position(order_id)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
