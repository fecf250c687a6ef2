"""
Q&A Forum Backend - Question Request/Response Schemas
=======================================================

What:  Pydantic models defining the question API contract.
How:   FastAPI validates request bodies against these models before the route
       body runs; a failure becomes a 400 "Invalid request data." response.

Field rules (POST and PUT share them):
    title, description, category: JSON strings, at least one character.
    Numbers, booleans, null and missing keys are rejected; no coercion.
"""

from typing import List

from pydantic import BaseModel, Field, StrictStr


class QuestionPayload(BaseModel):
    """Body of POST /questions and PUT /questions/{id}."""
    title: StrictStr = Field(min_length=1, description="Question title")
    description: StrictStr = Field(min_length=1, description="Question body")
    category: StrictStr = Field(min_length=1, description="Free-form category label")


class QuestionOut(BaseModel):
    """A question row as exposed by the API."""
    id: int = Field(description="Generated question id")
    title: str
    description: str
    category: str

    model_config = {"from_attributes": True}


class QuestionListResponse(BaseModel):
    """Returned by GET /questions and GET /questions/search."""
    data: List[QuestionOut]


class QuestionDetailResponse(BaseModel):
    """Returned by GET /questions/{id}."""
    data: QuestionOut


class QuestionUpdateResponse(BaseModel):
    """Returned by PUT /questions/{id}: message plus the row as stored."""
    message: str
    data: QuestionOut
