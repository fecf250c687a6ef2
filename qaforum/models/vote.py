"""
Q&A Forum Backend - Vote SQLAlchemy Models
============================================

What:  ORM models for the `question_votes` and `answer_votes` tables.

Votes are append-only: one row per vote call, no voter identity, no update.
The only way a vote row disappears is the cascade run when its question (or
the question owning its answer) is deleted.

The CHECK constraint mirrors request validation: a vote is exactly +1 or -1.
"""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from qaforum.database import Base


UPVOTE = 1
DOWNVOTE = -1
VOTE_VALUES = (UPVOTE, DOWNVOTE)


class QuestionVote(Base):
    """A single +1/-1 cast on a question."""

    __tablename__ = "question_votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id"),
        nullable=False,
    )

    vote: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("vote IN (1, -1)", name="ck_question_votes_vote"),
        Index("idx_question_votes_question_id", "question_id"),
    )

    def __repr__(self) -> str:
        return f"<QuestionVote(id={self.id}, question_id={self.question_id}, vote={self.vote})>"


class AnswerVote(Base):
    """A single +1/-1 cast on an answer."""

    __tablename__ = "answer_votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    answer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("answers.id"),
        nullable=False,
    )

    vote: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("vote IN (1, -1)", name="ck_answer_votes_vote"),
        Index("idx_answer_votes_answer_id", "answer_id"),
    )

    def __repr__(self) -> str:
        return f"<AnswerVote(id={self.id}, answer_id={self.answer_id}, vote={self.vote})>"
