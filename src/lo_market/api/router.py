"""lo_market REST endpoints.

GET /market/prices   — current snapshot plus resolved table prices
PUT /market/prices   — replace the snapshot atomically
GET /market/tokens   — token table, optional ticker/name search
"""

from fastapi import APIRouter, Query, Request

from src.lo_common.response import ApiResponse, success_response
from src.lo_market.application.schemas import PricesUpdateRequest
from src.lo_market.application.service import MarketApplicationService

router = APIRouter(prefix="/market", tags=["market"])

_service = MarketApplicationService()


@router.get("/prices")
async def get_prices(request: Request) -> ApiResponse:
    result = _service.get_prices()
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/prices")
async def replace_prices(body: PricesUpdateRequest, request: Request) -> ApiResponse:
    result = _service.replace_prices(body.prices)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/tokens")
async def list_tokens(
    request: Request,
    q: str = Query("", description="Ticker or name substring"),
) -> ApiResponse:
    result = _service.list_tokens(q)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
