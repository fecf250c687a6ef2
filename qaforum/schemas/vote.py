"""
Q&A Forum Backend - Vote Request Schema
=========================================

What:  Body of POST /questions/{id}/vote and POST /answer/{id}/vote.

`vote` must be the JSON integer 1 or -1. StrictInt rejects strings ("1"),
floats, booleans and null before the value check runs.
"""

from pydantic import BaseModel, Field, StrictInt, field_validator

from qaforum.models.vote import VOTE_VALUES


class VotePayload(BaseModel):
    vote: StrictInt = Field(description="1 for an upvote, -1 for a downvote")

    @field_validator("vote")
    @classmethod
    def validate_vote(cls, v: int) -> int:
        if v not in VOTE_VALUES:
            raise ValueError(f"vote must be one of {VOTE_VALUES}, got {v}")
        return v
