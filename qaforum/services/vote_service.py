"""
Q&A Forum Backend - Vote Service
==================================

What:  Records append-only votes on questions and answers.
How:   Checks the target row exists (404 otherwise), then inserts a new vote
       row. No deduplication, no tally is maintained.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qaforum.database import is_row_id
from qaforum.exceptions import DatabaseError, NotFoundError
from qaforum.models.answer import Answer
from qaforum.models.question import Question
from qaforum.models.vote import AnswerVote, QuestionVote

logger = logging.getLogger(__name__)


class VoteService:

    async def vote_question(self, db: AsyncSession, question_id: int, vote: int) -> None:
        """
        Raises:
            NotFoundError: "Question not found."
            DatabaseError: "Unable to vote question."
        """
        if not is_row_id(question_id):
            raise NotFoundError(
                message="Question not found.", resource="question", resource_id=question_id
            )

        try:
            result = await db.execute(select(Question.id).where(Question.id == question_id))
            if result.scalar_one_or_none() is None:
                raise NotFoundError(
                    message="Question not found.", resource="question", resource_id=question_id
                )

            db.add(QuestionVote(question_id=question_id, vote=vote))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error voting on question %s: %s", question_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Unable to vote question.",
                context={"question_id": question_id},
            )

        logger.info("Recorded vote %+d on question %s", vote, question_id)

    async def vote_answer(self, db: AsyncSession, answer_id: int, vote: int) -> None:
        """
        Raises:
            NotFoundError: "Answer not found."
            DatabaseError: "Unable to vote answer."
        """
        if not is_row_id(answer_id):
            raise NotFoundError(
                message="Answer not found.", resource="answer", resource_id=answer_id
            )

        try:
            result = await db.execute(select(Answer.id).where(Answer.id == answer_id))
            if result.scalar_one_or_none() is None:
                raise NotFoundError(
                    message="Answer not found.", resource="answer", resource_id=answer_id
                )

            db.add(AnswerVote(answer_id=answer_id, vote=vote))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error voting on answer %s: %s", answer_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Unable to vote answer.",
                context={"answer_id": answer_id},
            )

        logger.info("Recorded vote %+d on answer %s", vote, answer_id)


vote_service = VoteService()
