"""
Q&A Forum Backend - Answer SQLAlchemy Model
=============================================

What:  ORM model representing the `answers` table.

Constraints:
    - question_id → questions.id (NOT NULL). Answer inserts do not check the
      parent first; the foreign key is the only guard.
    - content is capped at 300 characters, matching the request schema.
"""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from qaforum.database import Base


ANSWER_MAX_LENGTH = 300


class Answer(Base):
    """A reply scoped to exactly one question."""

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(String(ANSWER_MAX_LENGTH), nullable=False)

    __table_args__ = (
        Index("idx_answers_question_id", "question_id"),
    )

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, question_id={self.question_id})>"
