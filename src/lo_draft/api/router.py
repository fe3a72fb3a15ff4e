"""lo_draft REST endpoints.

POST   /drafts                                  — new draft session (PLS -> HEX)
GET    /drafts/{id}                             — draft resynced to the current market
DELETE /drafts/{id}                             — discard
POST   /drafts/{id}/sell-amount                 — edit sell amount
POST   /drafts/{id}/buy-lines/{index}/amount    — edit a buy amount
POST   /drafts/{id}/price                       — edit primary limit price
POST   /drafts/{id}/buy-lines/{index}/price     — edit an unbound line's price
POST   /drafts/{id}/preset                      — percent-from-market preset
POST   /drafts/{id}/invert | /bound | /swap     — display and pricing toggles
POST   /drafts/{id}/buy-lines                   — add a buy line
DELETE /drafts/{id}/buy-lines/{index}           — remove a buy line
PUT    /drafts/{id}/sell-token                  — select sell token
PUT    /drafts/{id}/buy-lines/{index}/token     — select buy token
PUT    /drafts/{id}/expiration                  — expiration in seconds
GET    /drafts/{id}/selectable-tokens           — picker contents
POST   /drafts/{id}/drag/begin|update|end       — price marker drag
GET    /drafts/{id}/submission                  — contract call arguments

Reducer errors come back in data.errors with code 0; only unknown sessions,
unknown tokens and an unsubmittable draft produce an error envelope.
"""

from typing import Any

from fastapi import APIRouter, Query, Request

from src.lo_common.response import ApiResponse, success_response
from src.lo_draft.application.schemas import (
    AmountRequest,
    BoundRequest,
    CreateDraftRequest,
    DragBeginRequest,
    DragEndRequest,
    DragUpdateRequest,
    ExpirationRequest,
    PresetRequest,
    PriceRequest,
    TokenSelectRequest,
)
from src.lo_draft.application.service import DraftApplicationService
from src.lo_draft.domain.reducer import (
    AddBuyLine,
    ApplyPercentPreset,
    EditBuyAmount,
    EditLinePrice,
    EditPrice,
    EditSellAmount,
    RemoveBuyLine,
    SelectBuyToken,
    SelectSellToken,
    SetBound,
    SetExpiration,
    SwapSides,
    ToggleInvert,
)

router = APIRouter(prefix="/drafts", tags=["drafts"])

_service = DraftApplicationService()


def _ok(request: Request, data: Any) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=201)
async def create_draft(body: CreateDraftRequest, request: Request) -> ApiResponse:
    return _ok(request, _service.create(body).model_dump())


@router.get("/{session_id}")
async def get_draft(session_id: str, request: Request) -> ApiResponse:
    return _ok(request, _service.get(session_id).model_dump())


@router.delete("/{session_id}")
async def delete_draft(session_id: str, request: Request) -> ApiResponse:
    _service.delete(session_id)
    return _ok(request, None)


@router.post("/{session_id}/sell-amount")
async def edit_sell_amount(session_id: str, body: AmountRequest, request: Request) -> ApiResponse:
    result = _service.dispatch(session_id, EditSellAmount(body.amount))
    return _ok(request, result.model_dump())


@router.post("/{session_id}/buy-lines/{index}/amount")
async def edit_buy_amount(
    session_id: str, index: int, body: AmountRequest, request: Request
) -> ApiResponse:
    result = _service.dispatch(session_id, EditBuyAmount(index, body.amount))
    return _ok(request, result.model_dump())


@router.post("/{session_id}/price")
async def edit_price(session_id: str, body: PriceRequest, request: Request) -> ApiResponse:
    result = _service.dispatch(session_id, EditPrice(body.price, displayed=body.displayed))
    return _ok(request, result.model_dump())


@router.post("/{session_id}/buy-lines/{index}/price")
async def edit_line_price(
    session_id: str, index: int, body: PriceRequest, request: Request
) -> ApiResponse:
    result = _service.dispatch(session_id, EditLinePrice(index, body.price))
    return _ok(request, result.model_dump())


@router.post("/{session_id}/preset")
async def apply_preset(session_id: str, body: PresetRequest, request: Request) -> ApiResponse:
    result = _service.dispatch(session_id, ApplyPercentPreset(body.percent, body.direction))
    return _ok(request, result.model_dump())


@router.post("/{session_id}/invert")
async def toggle_invert(session_id: str, request: Request) -> ApiResponse:
    return _ok(request, _service.dispatch(session_id, ToggleInvert()).model_dump())


@router.post("/{session_id}/bound")
async def set_bound(session_id: str, body: BoundRequest, request: Request) -> ApiResponse:
    return _ok(request, _service.dispatch(session_id, SetBound(body.bound)).model_dump())


@router.post("/{session_id}/swap")
async def swap_sides(session_id: str, request: Request) -> ApiResponse:
    return _ok(request, _service.dispatch(session_id, SwapSides()).model_dump())


@router.post("/{session_id}/buy-lines")
async def add_buy_line(session_id: str, request: Request) -> ApiResponse:
    return _ok(request, _service.dispatch(session_id, AddBuyLine()).model_dump())


@router.delete("/{session_id}/buy-lines/{index}")
async def remove_buy_line(session_id: str, index: int, request: Request) -> ApiResponse:
    return _ok(request, _service.dispatch(session_id, RemoveBuyLine(index)).model_dump())


@router.put("/{session_id}/sell-token")
async def select_sell_token(
    session_id: str, body: TokenSelectRequest, request: Request
) -> ApiResponse:
    token = _service.resolve_token(body.address)
    return _ok(request, _service.dispatch(session_id, SelectSellToken(token)).model_dump())


@router.put("/{session_id}/buy-lines/{index}/token")
async def select_buy_token(
    session_id: str, index: int, body: TokenSelectRequest, request: Request
) -> ApiResponse:
    token = _service.resolve_token(body.address)
    return _ok(request, _service.dispatch(session_id, SelectBuyToken(index, token)).model_dump())


@router.put("/{session_id}/expiration")
async def set_expiration(
    session_id: str, body: ExpirationRequest, request: Request
) -> ApiResponse:
    return _ok(request, _service.dispatch(session_id, SetExpiration(body.seconds)).model_dump())


@router.get("/{session_id}/selectable-tokens")
async def get_selectable_tokens(
    session_id: str,
    request: Request,
    q: str = Query("", description="Ticker or name substring"),
) -> ApiResponse:
    return _ok(request, _service.selectable_tokens(session_id, q).model_dump())


@router.post("/{session_id}/drag/begin")
async def begin_drag(session_id: str, body: DragBeginRequest, request: Request) -> ApiResponse:
    return _ok(request, _service.begin_drag(session_id, body.target).model_dump())


@router.post("/{session_id}/drag/update")
async def update_drag(session_id: str, body: DragUpdateRequest, request: Request) -> ApiResponse:
    result = _service.update_drag(session_id, body.pointer_y, body.container_height)
    return _ok(request, result.model_dump())


@router.post("/{session_id}/drag/end")
async def end_drag(session_id: str, body: DragEndRequest, request: Request) -> ApiResponse:
    return _ok(request, _service.end_drag(session_id, body.abandoned).model_dump())


@router.get("/{session_id}/submission")
async def get_submission(session_id: str, request: Request) -> ApiResponse:
    return _ok(request, _service.submission(session_id).model_dump())
