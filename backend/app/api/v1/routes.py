from fastapi import APIRouter, Depends, HTTPException, Request

from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_call
from app.schemas.call import (
    AnalysisResponse,
    CallStateResponse,
    ClaimResponse,
    EndCallResponse,
    MessageRequest,
    MessageResponse,
    NotesRequest,
    NotesResponse,
    QuoteResponse,
    RecommendationsResponse,
    StartCallResponse,
)
from app.usecases.analyze_call import analyze_call
from app.usecases.end_call import end_call
from app.usecases.generate_quote import generate_quote
from app.usecases.process_claim import process_claim
from app.usecases.recommend_products import recommend_products
from app.usecases.send_message import send_message
from app.usecases.start_call import start_call
from app.usecases.update_notes import update_notes

router = APIRouter(prefix="/api/v1")

# Use-case error code -> HTTP status
_ERROR_STATUS = {
    "call_not_found": 404,
    "empty_message": 422,
    "invalid_variant": 422,
    "quote_failed": 502,
}


def get_llm_client(request: Request) -> GeminiClient:
    """The client built at startup (see main.py)."""
    return request.app.state.llm_client


def _raise_for_error(result: dict) -> None:
    error = result.get("error")
    if error is None:
        return
    status = _ERROR_STATUS.get(error, 409)
    detail = result.get("detail") or error.replace("_", " ").capitalize()
    raise HTTPException(status_code=status, detail=detail)


@router.post("/calls", response_model=StartCallResponse)
async def post_call():
    return StartCallResponse(**start_call())


@router.get("/calls/{call_id}", response_model=CallStateResponse)
async def get_call_state(call_id: str):
    state = get_call(call_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Call not found")
    return CallStateResponse(**state.to_dict())


@router.post("/calls/{call_id}/messages", response_model=MessageResponse)
async def post_message(
    call_id: str,
    body: MessageRequest,
    client: GeminiClient = Depends(get_llm_client),
):
    result = await send_message(client, call_id, body.text)
    _raise_for_error(result)
    return MessageResponse(**result)


@router.put("/calls/{call_id}/notes", response_model=NotesResponse)
async def put_notes(call_id: str, body: NotesRequest):
    result = update_notes(call_id, body.notes)
    _raise_for_error(result)
    return NotesResponse(**result)


@router.post("/calls/{call_id}/end", response_model=EndCallResponse)
async def post_end(call_id: str, client: GeminiClient = Depends(get_llm_client)):
    result = await end_call(client, call_id)
    _raise_for_error(result)
    return EndCallResponse(**result)


@router.post("/calls/{call_id}/analysis", response_model=AnalysisResponse)
async def post_analysis(call_id: str, client: GeminiClient = Depends(get_llm_client)):
    result = await analyze_call(client, call_id)
    _raise_for_error(result)
    return AnalysisResponse(**result)


@router.post("/calls/{call_id}/recommendations", response_model=RecommendationsResponse)
async def post_recommendations(call_id: str, client: GeminiClient = Depends(get_llm_client)):
    result = await recommend_products(client, call_id)
    _raise_for_error(result)
    return RecommendationsResponse(**result)


@router.post("/calls/{call_id}/claim", response_model=ClaimResponse)
async def post_claim(
    call_id: str,
    variant: str = "accident",
    client: GeminiClient = Depends(get_llm_client),
):
    result = await process_claim(client, call_id, variant)
    _raise_for_error(result)
    return ClaimResponse(**result)


@router.post("/calls/{call_id}/quote", response_model=QuoteResponse)
async def post_quote(call_id: str, client: GeminiClient = Depends(get_llm_client)):
    """Generate a quote.  Generation failures surface as 502."""
    result = await generate_quote(client, call_id)
    _raise_for_error(result)
    return QuoteResponse(**result)
