"""
Q&A Forum Backend - Answer Request/Response Schemas
=====================================================

What:  Pydantic models for answers mounted under /questions/{id}/answers.

Field rules:
    content: JSON string, 1 to 300 characters.
"""

from typing import List

from pydantic import BaseModel, Field, StrictStr

from qaforum.models.answer import ANSWER_MAX_LENGTH


class AnswerPayload(BaseModel):
    """Body of POST /questions/{id}/answers."""
    content: StrictStr = Field(
        min_length=1,
        max_length=ANSWER_MAX_LENGTH,
        description=f"Answer text (max {ANSWER_MAX_LENGTH} characters)",
    )


class AnswerOut(BaseModel):
    """An answer row as exposed by the API."""
    id: int
    question_id: int
    content: str

    model_config = {"from_attributes": True}


class AnswerListResponse(BaseModel):
    """Returned by GET /questions/{id}/answers."""
    data: List[AnswerOut]
