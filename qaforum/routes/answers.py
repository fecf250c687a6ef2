"""
Q&A Forum Backend - Answer Route Handlers
===========================================

What:  Answers of one question, mounted at /questions/{question_id}/answers.

    POST   → create (201)
    GET    → list (404 when the question has none)
    DELETE → delete every answer of the question and their votes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qaforum.database import get_db_session
from qaforum.schemas.answer import AnswerListResponse, AnswerPayload
from qaforum.schemas.common import ErrorResponse, MessageResponse
from qaforum.services.answer_service import answer_service

router = APIRouter(prefix="/questions/{question_id}/answers", tags=["Answers"])


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid request data", "model": ErrorResponse},
        500: {"description": "Server error (including unknown question)", "model": ErrorResponse},
    },
    summary="Answer a question",
)
async def create_answer(
    question_id: int,
    payload: AnswerPayload,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await answer_service.create_answer(db, question_id, payload)
    return MessageResponse(message="Answer created successfully.")


@router.get(
    "",
    response_model=AnswerListResponse,
    responses={
        404: {"description": "No answers for this question", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the answers of a question",
)
async def list_answers(
    question_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> AnswerListResponse:
    answers = await answer_service.list_answers(db, question_id)
    return AnswerListResponse(data=answers)


@router.delete(
    "",
    response_model=MessageResponse,
    responses={
        404: {"description": "No answers for this question", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete every answer of a question",
)
async def delete_answers(
    question_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await answer_service.delete_answers(db, question_id)
    return MessageResponse(
        message="All answers for the question have been deleted successfully."
    )
