"""
Q&A Forum Backend - Question Service Unit Tests
=================================================

What:  Tests for QuestionService against a mock session (no real DB).

What we test:
    ✅ create adds a row and commits
    ✅ list/search/get map empty results onto NotFoundError
    ✅ update replaces all three fields, 404 for unknown ids
    ✅ ids outside the INTEGER range are NotFoundError without a query
    ✅ delete issues the four cascade statements and commits once
    ✅ SQLAlchemy failures become DatabaseError and roll back
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from qaforum.database import MAX_ROW_ID
from qaforum.exceptions import DatabaseError, NotFoundError
from qaforum.models.question import Question
from qaforum.schemas.question import QuestionPayload
from qaforum.services.question_service import QuestionService


def _scalars_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


def _one_result(row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    return result


class TestQuestionServiceCreate:
    """Tests for create_question."""

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_create_adds_row_and_commits(self, mock_db_session):
        payload = QuestionPayload(title="T", description="D", category="C")

        await self.service.create_question(mock_db_session, payload)

        mock_db_session.add.assert_called_once()
        added = mock_db_session.add.call_args.args[0]
        assert isinstance(added, Question)
        assert (added.title, added.description, added.category) == ("T", "D", "C")
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_commit_failure_raises_database_error(self, mock_db_session):
        mock_db_session.commit = AsyncMock(side_effect=SQLAlchemyError("connection lost"))
        payload = QuestionPayload(title="T", description="D", category="C")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_question(mock_db_session, payload)

        assert exc_info.value.message == "Unable to create question."
        mock_db_session.rollback.assert_awaited_once()


class TestQuestionServiceRead:
    """Tests for list, get and search."""

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_list_returns_rows(self, mock_db_session):
        rows = [
            Question(id=1, title="First", description="d1", category="general"),
            Question(id=2, title="Second", description="d2", category="python"),
        ]
        mock_db_session.execute.return_value = _scalars_result(rows)

        result = await self.service.list_questions(mock_db_session)

        assert [q.id for q in result] == [1, 2]
        assert result[1].category == "python"

    @pytest.mark.asyncio
    async def test_list_empty_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _scalars_result([])

        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.list_questions(mock_db_session)

    @pytest.mark.asyncio
    async def test_list_query_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("db down"))
        )

        with pytest.raises(DatabaseError, match="Unable to fetch questions."):
            await self.service.list_questions(mock_db_session)

    @pytest.mark.asyncio
    async def test_get_found(self, mock_db_session):
        mock_db_session.execute.return_value = _one_result(
            Question(id=7, title="T", description="D", category="C")
        )

        result = await self.service.get_question(mock_db_session, 7)

        assert result.id == 7
        assert result.title == "T"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _one_result(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_question(mock_db_session, 404)

        assert exc_info.value.message == "Question not found."
        assert exc_info.value.context["resource_id"] == "404"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question_id", [0, MAX_ROW_ID + 1, 10**20])
    async def test_unreachable_id_skips_the_query(self, mock_db_session, question_id):
        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.get_question(mock_db_session, question_id)
        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.update_question(
                mock_db_session,
                question_id,
                QuestionPayload(title="T", description="D", category="C"),
            )
        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.delete_question(mock_db_session, question_id)

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_search_empty_raises_no_questions_found(self, mock_db_session):
        mock_db_session.execute.return_value = _scalars_result([])

        with pytest.raises(NotFoundError, match="No questions found."):
            await self.service.search_questions(mock_db_session, title="nothing")

    @pytest.mark.asyncio
    async def test_search_builds_filters_for_present_params_only(self, mock_db_session):
        mock_db_session.execute.return_value = _scalars_result(
            [Question(id=1, title="Python tips", description="d", category="Programming")]
        )

        await self.service.search_questions(mock_db_session, title="python", category="")

        statement = mock_db_session.execute.call_args.args[0]
        sql = str(statement.compile())
        assert "lower(questions.title)" in sql
        assert "lower(questions.category)" not in sql


class TestQuestionServiceUpdate:
    """Tests for update_question."""

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, mock_db_session):
        question = Question(id=3, title="old", description="old", category="old")
        mock_db_session.execute.return_value = _one_result(question)
        payload = QuestionPayload(title="new title", description="new desc", category="new cat")

        result = await self.service.update_question(mock_db_session, 3, payload)

        assert result.id == 3
        assert (result.title, result.description, result.category) == (
            "new title", "new desc", "new cat",
        )
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _one_result(None)
        payload = QuestionPayload(title="T", description="D", category="C")

        with pytest.raises(NotFoundError):
            await self.service.update_question(mock_db_session, 99, payload)

        mock_db_session.commit.assert_not_awaited()


class TestQuestionServiceDelete:
    """Tests for the cascading delete."""

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_delete_runs_cascade_in_order_then_commits(self, mock_db_session):
        final = MagicMock()
        final.rowcount = 1
        mock_db_session.execute = AsyncMock(
            side_effect=[MagicMock(), MagicMock(), MagicMock(), final]
        )

        await self.service.delete_question(mock_db_session, 1)

        tables = [
            str(call.args[0]).split()[2] for call in mock_db_session.execute.call_args_list
        ]
        assert tables == ["answer_votes", "answers", "question_votes", "questions"]
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_missing_rolls_back_and_raises_not_found(self, mock_db_session):
        final = MagicMock()
        final.rowcount = 0
        mock_db_session.execute = AsyncMock(
            side_effect=[MagicMock(), MagicMock(), MagicMock(), final]
        )

        with pytest.raises(NotFoundError, match="Question not found."):
            await self.service.delete_question(mock_db_session, 1)

        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_failure_mid_cascade_rolls_back(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=[
                MagicMock(),
                IntegrityError("DELETE FROM answers", {}, Exception("fk")),
            ]
        )

        with pytest.raises(DatabaseError, match="Unable to delete question and related data."):
            await self.service.delete_question(mock_db_session, 1)

        assert mock_db_session.execute.await_count == 2
        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()
