"""
Chat orchestration: one HTTP chat turn mapped onto at most two model turns and
at most one tool invocation.
"""

import logging
import uuid
from typing import Optional

import structlog

from ..errors import BadRequestError, ChatError, InternalError
from ..types import ChatRequest, ChatResponse
from .conversation import ChatModel
from .tools import ToolRegistry

_logger = logging.getLogger(__name__)


def resolve_session_id(session_id: Optional[str]) -> str:
    return session_id or str(uuid.uuid4())


class ChatOrchestrator:
    """Routes a user message through the model and the tool registry."""

    def __init__(
        self,
        model: ChatModel,
        registry: ToolRegistry,
        logger: Optional[logging.Logger] = None,
    ):
        self.model = model
        self.registry = registry
        self.logger = logger or _logger

    async def run_chat(self, request: ChatRequest) -> ChatResponse:
        return await self.handle_message(request.message, request.session_id)

    async def handle_message(self, message: Optional[str], session_id: Optional[str] = None) -> ChatResponse:
        if not message or not message.strip():
            raise BadRequestError("Message is required.")
        session = resolve_session_id(session_id)

        # Tool, portfolio and provider log lines of this turn carry the session
        with structlog.contextvars.bound_contextvars(session_id=session):
            try:
                return await self._converse(message, session)
            except ChatError as exc:
                self.logger.error("Chat processing failed for session %s: %s", session, exc.message)
                raise
            except Exception as exc:
                self.logger.exception("Unexpected error in chat handling for session %s", session)
                raise InternalError("An internal server error occurred.") from exc

    async def _converse(self, message: str, session_id: str) -> ChatResponse:
        conversation = self.model.start_conversation()
        turn = await conversation.send_turn(message)

        if turn.tool_call is None:
            return ChatResponse(type="text", content=turn.text or "", session_id=session_id)

        call = turn.tool_call
        self.logger.info("Model wants to call function %s with args %s", call.name, call.arguments)

        tool = self.registry.resolve(call.name)
        result = await tool.invoke(call.arguments, session_id)

        if tool.returns_directly:
            # Chart data is rendered by the client, not narrated by the model
            return ChatResponse(type="chart", content=result, session_id=session_id)

        final_text = await conversation.send_tool_result(call.name, result)
        return ChatResponse(type="text", content=final_text, session_id=session_id)
