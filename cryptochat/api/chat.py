from fastapi import APIRouter, Depends, Request

from ..core import ChatOrchestrator, resolve_session_id
from ..dependencies import get_orchestrator
from ..types import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_endpoint(
    chat_request: ChatRequest,
    request: Request,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> ChatResponse:
    """Chat endpoint: free-text question in, model reply or chart data out.

    Failures are raised as ``ChatError`` and rendered as ``{"error": ...}`` by
    the application's exception handlers.
    """
    chat_request.session_id = resolve_session_id(chat_request.session_id)
    # Read back by the request logging middleware
    request.state.session_id = chat_request.session_id
    return await orchestrator.run_chat(chat_request)
