"""
Q&A Forum Backend - Vote Route Handlers
=========================================

What:  POST /questions/{question_id}/vote and POST /answer/{answer_id}/vote.
How:   VotePayload rejects anything but the integers 1 and -1 (400
       "Invalid vote value."); the service answers 404 for a missing target.
       Success is 200 with a message; the vote row is not echoed.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qaforum.database import get_db_session
from qaforum.schemas.common import ErrorResponse, MessageResponse
from qaforum.schemas.vote import VotePayload
from qaforum.services.vote_service import vote_service

router = APIRouter(tags=["Votes"])

_ERRORS = {
    400: {"description": "Invalid vote value", "model": ErrorResponse},
    404: {"description": "Target not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/questions/{question_id}/vote",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Vote on a question",
)
async def vote_question(
    question_id: int,
    payload: VotePayload,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await vote_service.vote_question(db, question_id, payload.vote)
    return MessageResponse(message="Vote on the question has been recorded successfully.")


@router.post(
    "/answer/{answer_id}/vote",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Vote on an answer",
)
async def vote_answer(
    answer_id: int,
    payload: VotePayload,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await vote_service.vote_answer(db, answer_id, payload.vote)
    return MessageResponse(message="Vote on the answer has been recorded successfully.")
