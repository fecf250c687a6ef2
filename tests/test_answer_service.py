"""
Q&A Forum Backend - Answer Service Unit Tests
===============================================

What:  Tests for AnswerService against a mock session.

What we test:
    ✅ create inserts without looking the question up first
    ✅ a foreign-key violation on insert surfaces as DatabaseError, not 404
    ✅ list maps an empty result onto NotFoundError
    ✅ bulk delete removes votes before answers; zero rows → NotFoundError
    ✅ ids outside the INTEGER range never reach the session
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from qaforum.database import MAX_ROW_ID
from qaforum.exceptions import DatabaseError, NotFoundError
from qaforum.models.answer import Answer
from qaforum.schemas.answer import AnswerPayload
from qaforum.services.answer_service import AnswerService


class TestAnswerServiceCreate:

    def setup_method(self):
        self.service = AnswerService()

    @pytest.mark.asyncio
    async def test_create_inserts_without_lookup(self, mock_db_session):
        await self.service.create_answer(
            mock_db_session, 5, AnswerPayload(content="Use a context manager.")
        )

        mock_db_session.execute.assert_not_awaited()
        added = mock_db_session.add.call_args.args[0]
        assert isinstance(added, Answer)
        assert added.question_id == 5
        assert added.content == "Use a context manager."
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_foreign_key_violation_is_database_error(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT INTO answers", {}, Exception("FOREIGN KEY"))
        )

        with pytest.raises(DatabaseError, match="Unable to create answer."):
            await self.service.create_answer(mock_db_session, 999, AnswerPayload(content="x"))

        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_under_unreachable_id_is_database_error(self, mock_db_session):
        with pytest.raises(DatabaseError, match="Unable to create answer."):
            await self.service.create_answer(
                mock_db_session, MAX_ROW_ID + 1, AnswerPayload(content="x")
            )

        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()


class TestAnswerServiceList:

    def setup_method(self):
        self.service = AnswerService()

    @pytest.mark.asyncio
    async def test_list_returns_answers(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [
            Answer(id=1, question_id=2, content="first"),
            Answer(id=4, question_id=2, content="second"),
        ]
        mock_db_session.execute.return_value = result

        answers = await self.service.list_answers(mock_db_session, 2)

        assert [(a.id, a.question_id, a.content) for a in answers] == [
            (1, 2, "first"),
            (4, 2, "second"),
        ]

    @pytest.mark.asyncio
    async def test_list_empty_raises_not_found(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.list_answers(mock_db_session, 2)


class TestAnswerServiceDelete:

    def setup_method(self):
        self.service = AnswerService()

    @pytest.mark.asyncio
    async def test_delete_removes_votes_then_answers(self, mock_db_session):
        answers_result = MagicMock()
        answers_result.rowcount = 2
        mock_db_session.execute = AsyncMock(side_effect=[MagicMock(), answers_result])

        deleted = await self.service.delete_answers(mock_db_session, 3)

        assert deleted == 2
        statements = [str(call.args[0]) for call in mock_db_session.execute.call_args_list]
        assert statements[0].startswith("DELETE FROM answer_votes")
        assert statements[1].startswith("DELETE FROM answers")
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_nothing_raises_not_found(self, mock_db_session):
        answers_result = MagicMock()
        answers_result.rowcount = 0
        mock_db_session.execute = AsyncMock(side_effect=[MagicMock(), answers_result])

        with pytest.raises(NotFoundError):
            await self.service.delete_answers(mock_db_session, 3)

        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()


class TestAnswerServiceUnreachableIds:

    def setup_method(self):
        self.service = AnswerService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question_id", [-1, MAX_ROW_ID + 1])
    async def test_list_and_delete_raise_not_found_without_querying(
        self, mock_db_session, question_id
    ):
        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.list_answers(mock_db_session, question_id)
        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.delete_answers(mock_db_session, question_id)

        mock_db_session.execute.assert_not_awaited()
