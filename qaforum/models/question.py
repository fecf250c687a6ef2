"""
Q&A Forum Backend - Question SQLAlchemy Model
===============================================

What:  ORM model representing the `questions` table.
Who:   Used by QuestionService for CRUD and by Alembic for schema management.

Table Design:
    - Integer primary key: generated by the database, doubles as the list
      ordering key (GET /questions returns ORDER BY id ASC)
    - title / description / category: required free text
    - No ON DELETE CASCADE on dependants; QuestionService removes answer
      votes, answers and question votes explicitly, in that order
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from qaforum.database import Base


class Question(Base):
    """
    A top-level post.

    Lifecycle:
        1. Created by POST /questions
        2. Title, description and category replaced together by PUT
        3. Deleted by DELETE /questions/{id} together with every dependant row
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, title='{self.title}', category='{self.category}')>"
