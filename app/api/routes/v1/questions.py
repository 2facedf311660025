from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user_id, parse_path_id
from app.api.responses import default_error_responses, error_responses
from app.core.exceptions import ItemNotFoundError, QuestionNotFoundError
from app.db.session import get_db
from app.schemas.questions import AnswerCreate, QuestionCreate, QuestionCreated, QuestionResponse
from app.schemas.schemas import Message
from app.services.questions import QuestionService

router = APIRouter()


@router.get(
    "/item/{item_id}/question",
    response_model=List[QuestionResponse],
    summary="List questions asked about an item.",
    responses=error_responses(status.HTTP_404_NOT_FOUND, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def list_questions(
    item_id: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Questions with their answers, newest first."""
    return await QuestionService(db).list_for_item(parse_path_id(item_id, ItemNotFoundError))


@router.post(
    "/item/{item_id}/question",
    response_model=QuestionCreated,
    summary="Ask a question about an item.",
    responses=default_error_responses,
)
async def ask_question(
    item_id: str,
    question_in: QuestionCreate,
    db: AsyncSession = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id),
) -> Any:
    """Ask a question about someone else's item."""
    question_id = await QuestionService(db).ask(
        parse_path_id(item_id, ItemNotFoundError), current_user_id, question_in.question_text
    )
    return {"question_id": question_id}


@router.post(
    "/question/{question_id}",
    response_model=Message,
    summary="Answer a question on one of your items.",
    responses=default_error_responses,
)
async def answer_question(
    question_id: str,
    answer_in: AnswerCreate,
    db: AsyncSession = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id),
) -> Any:
    await QuestionService(db).answer(
        parse_path_id(question_id, QuestionNotFoundError), current_user_id, answer_in.answer_text
    )
    return {"message": "Answer added successfully"}
