"""Test error handling functionality.

Verifies that custom exceptions carry the expected attributes and that the
error response factory renders both JSON and HTML bodies.
"""
import json
import pytest
from core.exceptions import (
    NotFoundError,
    SubmissionValidationError,
    DuplicateEmailError,
    StorageError,
    NotificationError,
)
from core.error_handlers import create_error_response


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("Submission", 123)
    assert exc.status_code == 404
    assert "Submission" in exc.message
    assert "123" in exc.message

    exc = SubmissionValidationError(["Name is required.", "Age is required."])
    assert exc.status_code == 422
    assert exc.messages == ["Name is required.", "Age is required."]
    assert exc.details == {"messages": exc.messages}

    exc = DuplicateEmailError("amara@example.com")
    assert exc.status_code == 409
    assert exc.email == "amara@example.com"

    exc = StorageError(operation="submit")
    assert exc.status_code == 500
    assert exc.message == "We could not save your submission."
    assert exc.details == {"operation": "submit"}

    exc = NotificationError("amara@example.com", "connection refused")
    assert "connection refused" in exc.message


def test_json_error_response():
    res = create_error_response("Boom", status_code=500, details={"type": "internal_error"})
    body = json.loads(res.body)
    assert res.status_code == 500
    assert body == {"error": {"message": "Boom", "status_code": 500, "details": {"type": "internal_error"}}}


def test_html_error_response_lists_messages():
    res = create_error_response(
        "Submission failed validation",
        status_code=422,
        messages=["Name is required.", "<b>bad</b>"],
        as_html=True,
    )
    html = res.body.decode()
    assert res.status_code == 422
    assert "<li>Name is required.</li>" in html
    assert "<li>&lt;b&gt;bad&lt;/b&gt;</li>" in html


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
