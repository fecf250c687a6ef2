"""ORM models. Importing this package registers every table on Base.metadata."""

from qaforum.models.question import Question
from qaforum.models.answer import Answer
from qaforum.models.vote import AnswerVote, QuestionVote

__all__ = ["Question", "Answer", "QuestionVote", "AnswerVote"]
