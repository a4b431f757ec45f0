from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Presence is checked by the orchestrator so a missing message maps to 400
    message: Optional[str] = Field(default=None, description="User message")
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Session identifier for portfolio continuity",
    )
