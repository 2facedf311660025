"""
Pydantic schemas for questions and answers.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class QuestionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question_text: str = Field(..., min_length=1)


class AnswerCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    answer_text: str = Field(..., min_length=1)


class QuestionCreated(BaseModel):
    question_id: int


class QuestionResponse(BaseModel):
    """Question as listed on an item, newest first."""

    model_config = ConfigDict(from_attributes=True)

    question_id: int
    question_text: str
    answer_text: Optional[str] = None
