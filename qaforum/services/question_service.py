"""
Q&A Forum Backend - Question Service
======================================

What:  Business logic for the question resource: create, list, get, search,
       update and cascading delete.
How:   Issues parameterized SQL through the request's AsyncSession. Reads map
       an empty result onto NotFoundError; writes commit explicitly and roll
       back on failure. Every SQLAlchemyError becomes a DatabaseError carrying
       the operation's generic message.
Who:   Called by the question route handlers.

Cascade Order (delete):
    answer_votes (of this question's answers)
    → answers
    → question_votes
    → questions
    All four statements run in one transaction and commit together.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qaforum.database import is_row_id
from qaforum.exceptions import DatabaseError, NotFoundError
from qaforum.models.answer import Answer
from qaforum.models.question import Question
from qaforum.models.vote import AnswerVote, QuestionVote
from qaforum.schemas.question import QuestionOut, QuestionPayload

logger = logging.getLogger(__name__)

QUESTION_NOT_FOUND = "Question not found."
NO_QUESTIONS_FOUND = "No questions found."


class QuestionService:
    """
    Business logic layer for question operations.

    Stateless: the session is passed into each call.
    """

    async def create_question(self, db: AsyncSession, payload: QuestionPayload) -> int:
        """
        Insert a new question.

        Returns:
            The generated id (the HTTP layer does not echo it).

        Raises:
            DatabaseError: insert or commit failed
        """
        question = Question(
            title=payload.title,
            description=payload.description,
            category=payload.category,
        )
        try:
            db.add(question)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error creating question: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Unable to create question.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Question %s created (category=%s)", question.id, question.category)
        return question.id

    async def list_questions(self, db: AsyncSession) -> List[QuestionOut]:
        """
        All questions, ascending by id.

        Raises:
            NotFoundError: the table is empty
            DatabaseError: query failed
        """
        try:
            result = await db.execute(select(Question).order_by(Question.id.asc()))
            questions = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error fetching questions: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Unable to fetch questions.",
                context={"error_type": type(e).__name__},
            )

        if not questions:
            raise NotFoundError(message=QUESTION_NOT_FOUND, resource="question")

        return [QuestionOut.model_validate(q) for q in questions]

    async def get_question(self, db: AsyncSession, question_id: int) -> QuestionOut:
        """
        Raises:
            NotFoundError: no row with this id
            DatabaseError: query failed
        """
        if not is_row_id(question_id):
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="question", resource_id=question_id
            )

        try:
            result = await db.execute(select(Question).where(Question.id == question_id))
            question = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error fetching question %s: %s", question_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Unable to fetch question.",
                context={"question_id": question_id},
            )

        if question is None:
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="question", resource_id=question_id
            )

        return QuestionOut.model_validate(question)

    async def search_questions(
        self,
        db: AsyncSession,
        title: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[QuestionOut]:
        """
        Conjunctive, case-insensitive substring search.

        An absent or empty filter is ignored; with neither filter every row
        matches. `%` and `_` in the filters are matched literally.

        Raises:
            NotFoundError: nothing matched
            DatabaseError: query failed
        """
        query = select(Question)
        if title:
            query = query.where(Question.title.icontains(title, autoescape=True))
        if category:
            query = query.where(Question.category.icontains(category, autoescape=True))
        query = query.order_by(Question.id.asc())

        try:
            result = await db.execute(query)
            questions = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Error searching questions (title=%r, category=%r): %s",
                title, category, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Unable to fetch questions.",
                context={"error_type": type(e).__name__},
            )

        if not questions:
            raise NotFoundError(message=NO_QUESTIONS_FOUND, resource="question")

        return [QuestionOut.model_validate(q) for q in questions]

    async def update_question(
        self, db: AsyncSession, question_id: int, payload: QuestionPayload
    ) -> QuestionOut:
        """
        Replace title, description and category of an existing question.

        Returns:
            The row as stored after the update.

        Raises:
            NotFoundError: no row with this id
            DatabaseError: query, update or commit failed
        """
        if not is_row_id(question_id):
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="question", resource_id=question_id
            )

        try:
            result = await db.execute(select(Question).where(Question.id == question_id))
            question = result.scalar_one_or_none()
            if question is None:
                raise NotFoundError(
                    message=QUESTION_NOT_FOUND, resource="question", resource_id=question_id
                )

            question.title = payload.title
            question.description = payload.description
            question.category = payload.category
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Error updating question %s: %s", question_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Unable to update question.",
                context={"question_id": question_id},
            )

        logger.info("Question %s updated", question_id)
        return QuestionOut.model_validate(question)

    async def delete_question(self, db: AsyncSession, question_id: int) -> None:
        """
        Delete a question and every row that depends on it, atomically.

        Raises:
            NotFoundError: the final DELETE on questions matched no row
                (the transaction is rolled back)
            DatabaseError: any statement or the commit failed
                (the transaction is rolled back)
        """
        if not is_row_id(question_id):
            raise NotFoundError(
                message=QUESTION_NOT_FOUND, resource="question", resource_id=question_id
            )

        answer_ids = select(Answer.id).where(Answer.question_id == question_id)
        try:
            await db.execute(
                delete(AnswerVote)
                .where(AnswerVote.answer_id.in_(answer_ids))
                .execution_options(synchronize_session=False)
            )
            await db.execute(
                delete(Answer)
                .where(Answer.question_id == question_id)
                .execution_options(synchronize_session=False)
            )
            await db.execute(
                delete(QuestionVote)
                .where(QuestionVote.question_id == question_id)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(
                delete(Question)
                .where(Question.id == question_id)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                await db.rollback()
                raise NotFoundError(
                    message=QUESTION_NOT_FOUND, resource="question", resource_id=question_id
                )

            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "Error deleting question %s and related data: %s",
                question_id, str(e), exc_info=True,
            )
            raise DatabaseError(
                message="Unable to delete question and related data.",
                context={"question_id": question_id},
            )

        logger.info("Question %s and related data deleted", question_id)


# ── Singleton Instance ────────────────────────────────────────────────────
question_service = QuestionService()
