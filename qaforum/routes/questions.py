"""
Q&A Forum Backend - Question Route Handlers
=============================================

What:  HTTP surface of the question resource under /questions.
How:   Bodies are validated by QuestionPayload before the handler runs;
       handlers delegate to QuestionService and wrap results in the
       response envelope. Errors propagate to the global handlers.

/questions/search is declared before /questions/{question_id} so the
literal path is matched first.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from qaforum.database import get_db_session
from qaforum.schemas.common import ErrorResponse, MessageResponse
from qaforum.schemas.question import (
    QuestionDetailResponse,
    QuestionListResponse,
    QuestionPayload,
    QuestionUpdateResponse,
)
from qaforum.services.question_service import question_service

router = APIRouter(prefix="/questions", tags=["Questions"])

_ERRORS = {
    400: {"description": "Invalid request data", "model": ErrorResponse},
    404: {"description": "Question not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create a question",
)
async def create_question(
    payload: QuestionPayload,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await question_service.create_question(db, payload)
    return MessageResponse(message="Question created successfully.")


@router.get(
    "",
    response_model=QuestionListResponse,
    responses={404: _ERRORS[404], 500: _ERRORS[500]},
    summary="List all questions",
    description="Returns every question ordered by id. An empty table answers 404.",
)
async def list_questions(
    db: AsyncSession = Depends(get_db_session),
) -> QuestionListResponse:
    questions = await question_service.list_questions(db)
    return QuestionListResponse(data=questions)


@router.get(
    "/search",
    response_model=QuestionListResponse,
    responses={404: _ERRORS[404], 500: _ERRORS[500]},
    summary="Search questions by title and/or category",
)
async def search_questions(
    title: Optional[str] = Query(
        default=None, description="Case-insensitive substring of the title"
    ),
    category: Optional[str] = Query(
        default=None, description="Case-insensitive substring of the category"
    ),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionListResponse:
    questions = await question_service.search_questions(db, title=title, category=category)
    return QuestionListResponse(data=questions)


@router.get(
    "/{question_id}",
    response_model=QuestionDetailResponse,
    responses=_ERRORS,
    summary="Get a question by id",
)
async def get_question(
    question_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionDetailResponse:
    question = await question_service.get_question(db, question_id)
    return QuestionDetailResponse(data=question)


@router.put(
    "/{question_id}",
    response_model=QuestionUpdateResponse,
    responses=_ERRORS,
    summary="Replace a question's title, description and category",
)
async def update_question(
    question_id: int,
    payload: QuestionPayload,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionUpdateResponse:
    question = await question_service.update_question(db, question_id, payload)
    return QuestionUpdateResponse(message="Question updated successfully.", data=question)


@router.delete(
    "/{question_id}",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Delete a question with its answers and votes",
)
async def delete_question(
    question_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await question_service.delete_question(db, question_id)
    return MessageResponse(message="Question and related data have been deleted successfully.")
