"""Business logic for questions and answers."""

from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ContentRejectedError,
    ItemNotFoundError,
    NotItemOwnerError,
    QuestionNotFoundError,
    SelfQuestionForbiddenError,
)
from app.core.metrics import record_business_event
from app.core.profanity import contains_profanity
from app.db.models import Item, Question
from app.schemas.questions import QuestionResponse


class QuestionService:
    """Service for asking questions about items and answering them."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def _get_creator_id(self, item_id: int) -> int:
        result = await self.db.execute(select(Item.creator_id).where(Item.id == item_id))
        creator_id = result.scalar_one_or_none()
        if creator_id is None:
            raise ItemNotFoundError()
        return int(creator_id)

    async def ask(self, item_id: int, asker_id: int, text: str) -> int:
        """Ask a question about someone else's item. Returns the question id."""
        if await self._get_creator_id(item_id) == asker_id:
            raise SelfQuestionForbiddenError()

        if contains_profanity(text):
            raise ContentRejectedError("question")

        question = Question(question=text, asked_by=asker_id, item_id=item_id)
        self.db.add(question)
        await self.db.commit()
        await self.db.refresh(question)

        record_business_event("question_asked")
        logger.info(f"User {asker_id} asked question {question.id} on item {item_id}")
        return int(question.id)

    async def answer(self, question_id: int, responder_id: int, text: str) -> None:
        """
        Answer a question on one of the responder's own items.

        Answering again replaces the previous answer.
        """
        query = (
            select(Question, Item.creator_id)
            .join(Item, Question.item_id == Item.id)
            .where(Question.id == question_id)
        )
        row = (await self.db.execute(query)).first()
        if row is None:
            raise QuestionNotFoundError()
        question, creator_id = row

        if creator_id != responder_id:
            raise NotItemOwnerError()

        if contains_profanity(text):
            raise ContentRejectedError("answer")

        question.answer = text
        await self.db.commit()

        record_business_event("question_answered")
        logger.info(f"Question {question_id} answered by user {responder_id}")

    async def list_for_item(self, item_id: int) -> List[QuestionResponse]:
        """All questions on an item, newest first."""
        await self._get_creator_id(item_id)

        query = select(Question).where(Question.item_id == item_id).order_by(Question.id.desc())
        result = await self.db.execute(query)
        return [
            QuestionResponse(question_id=q.id, question_text=q.question, answer_text=q.answer)
            for q in result.scalars().all()
        ]
