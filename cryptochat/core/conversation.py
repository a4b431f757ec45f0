"""
Narrow conversation interface over an LLM provider.

The orchestrator only ever starts a conversation, sends the user's text and,
optionally, one tool result. Provider specifics (message formats, tool schemas,
tool call ids) stay behind ``LLMConversation``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMProviderError,
    ToolCall,
    ToolDefinition,
    ToolResult,
)

SYSTEM_PROMPT = (
    "You are a helpful cryptocurrency assistant. Use the available tools to look up "
    "prices, coin statistics, trending coins and price charts, and to manage the "
    "user's simulated portfolio. Answer concisely in plain language."
)


@dataclass
class ModelTurn:
    """Outcome of one model turn: either text or a requested tool call."""
    text: Optional[str] = None
    tool_call: Optional[ToolCall] = None


class Conversation(ABC):
    @abstractmethod
    async def send_turn(self, text: str) -> ModelTurn:
        """Send user text; only the first requested tool call is kept."""

    @abstractmethod
    async def send_tool_result(self, name: str, result: Any) -> str:
        """Return a tool result to the model and get its final text."""


class ChatModel(ABC):
    @abstractmethod
    def start_conversation(self) -> Conversation:
        pass


class LLMConversation(Conversation):
    def __init__(
        self,
        provider: LLMProvider,
        tools: List[ToolDefinition],
        system_prompt: str = SYSTEM_PROMPT,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.tools = tools
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.logger = logger or logging.getLogger(__name__)
        self.messages: List[LLMMessage] = [LLMMessage(role="system", content=system_prompt)]
        self._pending_calls: Dict[str, ToolCall] = {}

    async def _generate(self):
        return await self.provider.generate_response(
            messages=self.messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            tools=self.tools,
        )

    async def send_turn(self, text: str) -> ModelTurn:
        self.messages.append(LLMMessage(role="user", content=text))
        response = await self._generate()

        if response.tool_calls:
            call = response.tool_calls[0]
            if len(response.tool_calls) > 1:
                self.logger.info(
                    "Model requested %d tool calls, honoring only %s",
                    len(response.tool_calls),
                    call.name,
                )
            self.messages.append(
                LLMMessage(role="assistant", content=response.content, tool_calls=[call])
            )
            self._pending_calls[call.name] = call
            return ModelTurn(text=response.content, tool_call=call)

        self.messages.append(LLMMessage(role="assistant", content=response.content or ""))
        return ModelTurn(text=response.content or "")

    async def send_tool_result(self, name: str, result: Any) -> str:
        call = self._pending_calls.pop(name, None)
        if call is None:
            raise LLMProviderError(f"No pending call for function '{name}'.")

        self.messages.append(
            LLMMessage(
                role="tool_result",
                tool_result=ToolResult(tool_call_id=call.id, result={"result": result}),
            )
        )
        response = await self._generate()
        text = response.content or ""
        self.messages.append(LLMMessage(role="assistant", content=text))
        return text


class LLMChatModel(ChatModel):
    """Starts provider-backed conversations with a fixed tool set."""

    def __init__(
        self,
        provider: LLMProvider,
        tools: List[ToolDefinition],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ):
        self.provider = provider
        self.tools = list(tools)
        self.max_tokens = max_tokens
        self.temperature = temperature

    def start_conversation(self) -> Conversation:
        return LLMConversation(
            provider=self.provider,
            tools=self.tools,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
