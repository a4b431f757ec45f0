from .chat import ChatOrchestrator, resolve_session_id
from .conversation import ChatModel, Conversation, LLMChatModel, LLMConversation, ModelTurn
from .portfolio import PortfolioStore
from .tools import DIRECT_RESULT_TOOLS, RegisteredTool, ToolName, ToolRegistry

__all__ = [
    "ChatOrchestrator",
    "resolve_session_id",
    "ChatModel",
    "Conversation",
    "LLMChatModel",
    "LLMConversation",
    "ModelTurn",
    "PortfolioStore",
    "DIRECT_RESULT_TOOLS",
    "RegisteredTool",
    "ToolName",
    "ToolRegistry",
]
