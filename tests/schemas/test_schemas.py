import pytest
from pydantic import ValidationError

from app.schemas import schemas
from app.schemas.items import BidCreate, ItemCreate, ItemCreated
from app.schemas.questions import AnswerCreate, QuestionCreate


def valid_user(**overrides):
    data = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", "password": "Passw0rd!"}
    data.update(overrides)
    return data


def test_user_create_valid():
    user = schemas.UserCreate(**valid_user())
    assert user.email == "ada@example.com"


@pytest.mark.parametrize(
    "password",
    ["short1!", "alllowercase1!", "ALLUPPERCASE1!", "NoDigitsHere!", "NoSpecial123", "A1!" + "a" * 30],
)
def test_user_create_rejects_weak_passwords(password):
    with pytest.raises(ValidationError):
        schemas.UserCreate(**valid_user(password=password))


def test_user_create_rejects_bad_email_and_extra_fields():
    with pytest.raises(ValidationError):
        schemas.UserCreate(**valid_user(email="not-an-email"))

    with pytest.raises(ValidationError):
        schemas.UserCreate(**valid_user(is_admin=True))


def test_item_create_accepts_digit_string_end_date():
    item = ItemCreate(name="Lamp", description="Brass", starting_bid=5, end_date="1893456000000")
    assert item.end_date == 1893456000000
    assert item.categories is None


@pytest.mark.parametrize("end_date", ["tomorrow", "12.5", True])
def test_item_create_rejects_non_integer_end_date(end_date):
    with pytest.raises(ValidationError):
        ItemCreate(name="Lamp", description="Brass", starting_bid=5, end_date=end_date)


def test_item_create_rejects_non_positive_starting_bid():
    with pytest.raises(ValidationError):
        ItemCreate(name="Lamp", description="Brass", starting_bid=0, end_date=1893456000000)


def test_item_created_omits_warning_when_unset():
    assert ItemCreated(item_id=3).model_dump(exclude_none=True) == {"item_id": 3}


def test_bid_and_question_bodies_are_strict():
    with pytest.raises(ValidationError):
        BidCreate(amount=0)
    with pytest.raises(ValidationError):
        BidCreate(amount=10, user_id=2)
    with pytest.raises(ValidationError):
        QuestionCreate(question_text="Is it working?", asked_by=1)
    with pytest.raises(ValidationError):
        AnswerCreate(answer_text="")


def test_user_create_keeps_password_whitespace_and_strips_names():
    user = schemas.UserCreate(**valid_user(first_name=" Ada ", password=" Passw0rd! "))
    assert user.first_name == "Ada"
    assert user.password == " Passw0rd! "


def test_amounts_are_bounded_by_column_range():
    assert BidCreate(amount=schemas.MAX_INT).amount == schemas.MAX_INT
    with pytest.raises(ValidationError):
        BidCreate(amount=schemas.MAX_INT + 1)
    with pytest.raises(ValidationError):
        ItemCreate(name="Lamp", description="Brass", starting_bid=schemas.MAX_INT + 1, end_date=1893456000000)
    with pytest.raises(ValidationError):
        ItemCreate(name="Lamp", description="Brass", starting_bid=5, end_date=str(schemas.MAX_BIGINT + 1))
