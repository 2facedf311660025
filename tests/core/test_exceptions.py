from app.core import exceptions


def test_status_codes_follow_base_class():
    assert exceptions.DuplicateEmailError().status_code == 400
    assert exceptions.AuthenticationError().status_code == 401
    assert exceptions.SelfBidForbiddenError().status_code == 403
    assert exceptions.ItemNotFoundError().status_code == 404
    assert exceptions.AuthenticationRequiredError().status_code == 400


def test_message_override():
    error = exceptions.BadRequestError("Something specific!")
    assert error.message == "Something specific!"
    assert str(error) == "Something specific!"


def test_content_rejected_names_field():
    error = exceptions.ContentRejectedError("description")
    assert error.field == "description"
    assert error.message == "Inappropriate language detected in description!"
    assert exceptions.ContentRejectedError().message == "Inappropriate language detected!"


def test_category_not_found_lists_ids():
    error = exceptions.CategoryNotFoundError([98, 99])
    assert error.message == "Unknown category ids: 98, 99"
    assert error.category_ids == [98, 99]
