"""
Q&A Forum Backend - Answer Service
====================================

What:  Create, list and bulk-delete answers of one question.

Notes:
    - create_answer does not look the question up first. When the parent is
      missing the foreign key rejects the insert and the caller sees a
      DatabaseError (500), not a 404.
    - There is no single-answer delete; delete_answers removes every answer of
      the question together with their votes, in one transaction.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qaforum.database import is_row_id
from qaforum.exceptions import DatabaseError, NotFoundError
from qaforum.models.answer import Answer
from qaforum.models.vote import AnswerVote
from qaforum.schemas.answer import AnswerOut, AnswerPayload

logger = logging.getLogger(__name__)

QUESTION_NOT_FOUND = "Question not found."


class AnswerService:

    async def create_answer(
        self, db: AsyncSession, question_id: int, payload: AnswerPayload
    ) -> int:
        """
        Insert an answer under `question_id`.

        Raises:
            DatabaseError: insert failed, including the foreign-key violation
                raised for a missing question
        """
        if not is_row_id(question_id):
            # Outside the INTEGER range no question can own it
            raise DatabaseError(
                message="Unable to create answer.",
                context={"question_id": question_id, "error_type": "ForeignKeyViolation"},
            )

        answer = Answer(question_id=question_id, content=payload.content)
        try:
            db.add(answer)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "Error creating answer for question %s: %s", question_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Unable to create answer.",
                context={"question_id": question_id, "error_type": type(e).__name__},
            )

        logger.info("Answer %s created for question %s", answer.id, question_id)
        return answer.id

    async def list_answers(self, db: AsyncSession, question_id: int) -> List[AnswerOut]:
        """
        Answers of one question, ascending by id.

        Raises:
            NotFoundError: the question has no answers (or does not exist)
            DatabaseError: query failed
        """
        if not is_row_id(question_id):
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="answer", resource_id=question_id
            )

        try:
            result = await db.execute(
                select(Answer)
                .where(Answer.question_id == question_id)
                .order_by(Answer.id.asc())
            )
            answers = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Error fetching answers for question %s: %s", question_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Unable to fetch answers.",
                context={"question_id": question_id},
            )

        if not answers:
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="answer", resource_id=question_id
            )

        return [AnswerOut.model_validate(a) for a in answers]

    async def delete_answers(self, db: AsyncSession, question_id: int) -> int:
        """
        Delete the votes of every answer of the question, then the answers.

        Returns:
            Number of answers deleted.

        Raises:
            NotFoundError: no answer was deleted (transaction rolled back)
            DatabaseError: a statement or the commit failed
        """
        if not is_row_id(question_id):
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="answer", resource_id=question_id
            )

        answer_ids = select(Answer.id).where(Answer.question_id == question_id)
        try:
            await db.execute(
                delete(AnswerVote)
                .where(AnswerVote.answer_id.in_(answer_ids))
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(
                delete(Answer)
                .where(Answer.question_id == question_id)
                .execution_options(synchronize_session=False)
            )

            deleted = result.rowcount
            if deleted == 0:
                await db.rollback()
                raise NotFoundError(
                    message=QUESTION_NOT_FOUND, resource="answer", resource_id=question_id
                )

            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "Error deleting answers for question %s: %s", question_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Unable to delete answers.",
                context={"question_id": question_id},
            )

        logger.info("Deleted %d answer(s) of question %s", deleted, question_id)
        return deleted


answer_service = AnswerService()
