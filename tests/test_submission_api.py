"""End-to-end tests for the questionnaire HTTP endpoints."""
import pytest
from fastapi.testclient import TestClient
from main import app
from services.notifier import EmailNotifier, get_notifier


@pytest.fixture
def outbox(mail_settings, smtp_outbox):
    sent, _, factory = smtp_outbox
    app.dependency_overrides[get_notifier] = lambda: EmailNotifier(mail_settings, smtp_factory=factory)
    yield sent
    app.dependency_overrides.pop(get_notifier, None)


@pytest.fixture
def client(outbox):
    with TestClient(app) as c:
        yield c


def _form(amara_form):
    data = dict(amara_form)
    data["conditions[]"] = data.pop("conditions")
    data["foods[]"] = data.pop("foods")
    return data


def test_valid_form_renders_confirmation(client, amara_form, outbox):
    res = client.post("/submit", data=_form(amara_form))

    assert res.status_code == 200
    assert "text/html" in res.headers["content-type"]
    assert "Thanks, Amara!" in res.text
    assert "amara@example.com" in res.text
    assert len(outbox) == 2

    stored = client.get("/api/submissions/1").json()
    assert stored["name"] == "Amara"
    assert stored["conditions"] == ["asthma"]
    assert stored["foods"] == ["peanuts"]
    assert len(stored["responses"]) == 13


def test_missing_fields_render_error_listing(client, amara_form, outbox):
    data = _form(amara_form)
    del data["name"]
    data["email"] = "not-an-email"

    res = client.post("/submit", data=data)

    assert res.status_code == 422
    assert "<h2>Form errors</h2>" in res.text
    assert "<li>Name is required.</li>" in res.text
    assert "<li>Invalid email address.</li>" in res.text
    assert outbox == []


def test_empty_post_lists_all_required_fields(client):
    res = client.post("/submit", headers={"accept": "text/html"})
    assert res.status_code == 422
    assert "text/html" in res.headers["content-type"]
    assert res.text.count("<li>") == 17


def test_duplicate_email_returns_409(client, amara_form, outbox):
    assert client.post("/submit", data=_form(amara_form)).status_code == 200
    res = client.post("/submit", data=_form(amara_form))

    assert res.status_code == 409
    assert "This email is already registered. Please use a different email." in res.text
    assert len(outbox) == 2


def test_confirmation_escapes_submitter_name(client, amara_form):
    amara_form["name"] = "<script>alert(1)</script>"
    res = client.post("/submit", data=_form(amara_form))
    assert res.status_code == 200
    assert "<script>" not in res.text
    assert "&lt;script&gt;" in res.text


def test_mail_failure_still_confirms(client, amara_form, smtp_outbox):
    _, failing, _ = smtp_outbox
    failing.update({"amara@example.com", "admin@example.com"})
    res = client.post("/submit", data=_form(amara_form))
    assert res.status_code == 200
    assert client.get("/api/submissions/1").status_code == 200


def test_unknown_submission_returns_json_404(client):
    res = client.get("/api/submissions/999")
    assert res.status_code == 404
    body = res.json()
    assert body["error"]["status_code"] == 404
    assert "Submission" in body["error"]["message"]


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "database": "connected"}
