"""Tests for turning raw form values into storable values."""
import pytest
from schemas import QuestionnaireSubmission
from services.normalization import normalize_submission, collect_responses, to_int, optional_int


@pytest.mark.parametrize("raw,expected", [("29", 29), (" 42 ", 42), ("72.5", 72), ("abc", 0), ("-3", -3)])
def test_to_int(raw, expected):
    assert to_int(raw) == expected


def test_optional_int_blank_is_none():
    assert optional_int("") is None
    assert optional_int("   ") is None
    assert optional_int(None) is None
    assert optional_int("180") == 180


def test_normalize_trims_and_coerces(amara_form):
    amara_form.update({
        "name": "  Amara  ",
        "height_cm": "165",
        "weight_kg": "",
        "occupation": " nurse ",
        "location": "",
        "conditions": [" asthma ", "", "   ", "diabetes"],
        "foods": ["peanuts ", ""],
    })
    data = normalize_submission(QuestionnaireSubmission(**amara_form))
    assert data.name == "Amara"
    assert data.age == 29
    assert data.height_cm == 165
    assert data.weight_kg is None
    assert data.occupation == "nurse"
    assert data.location is None
    assert data.conditions == ["asthma", "diabetes"]
    assert data.foods == ["peanuts"]


def test_responses_only_for_supplied_keys(amara_form):
    pairs = collect_responses(QuestionnaireSubmission(**amara_form))
    labels = [q for q, _ in pairs]
    assert len(pairs) == 13
    assert "Meals per day" in labels
    assert "Do you skip breakfast?" in labels
    assert "Allergies (food/medication)" not in labels
    assert "Supplements" not in labels


def test_explicitly_supplied_empty_field_is_recorded(amara_form):
    amara_form["supplements"] = ""
    pairs = dict(collect_responses(QuestionnaireSubmission(**amara_form)))
    assert pairs["Supplements"] == ""


def test_symptom_list_is_joined(amara_form):
    amara_form["symptoms"] = [" headache", "fatigue "]
    pairs = dict(collect_responses(QuestionnaireSubmission(**amara_form)))
    assert pairs["Recent symptoms"] == "headache, fatigue"


def test_blank_symptom_entries_keep_their_slot(amara_form):
    amara_form["symptoms"] = ["headache", " ", "fatigue"]
    pairs = dict(collect_responses(QuestionnaireSubmission(**amara_form)))
    assert pairs["Recent symptoms"] == "headache, , fatigue"


def test_answers_are_trimmed(amara_form):
    amara_form["primary_goal"] = "  weight loss "
    pairs = dict(collect_responses(QuestionnaireSubmission(**amara_form)))
    assert pairs["Primary health goal"] == "weight loss"


def test_from_form_items_handles_array_keys():
    submission = QuestionnaireSubmission.from_form_items([
        ("name", "Amara"),
        ("conditions[]", "asthma"),
        ("conditions[]", ""),
        ("foods", "peanuts"),
        ("symptoms", "headache"),
        ("symptoms", "fatigue"),
        ("unknown_field", "ignored"),
    ])
    assert submission.name == "Amara"
    assert submission.conditions == ["asthma", ""]
    assert submission.foods == ["peanuts"]
    assert submission.symptoms == ["headache", "fatigue"]
    assert "unknown_field" not in submission.model_fields_set


def test_single_symptom_stays_scalar():
    submission = QuestionnaireSubmission.from_form_items([("symptoms", "headache")])
    assert submission.symptoms == "headache"


@pytest.mark.parametrize("raw,expected", [("asthma", ["asthma"]), (None, []), ([None, "asthma"], ["asthma"])])
def test_list_fields_accept_lone_values(raw, expected):
    submission = QuestionnaireSubmission(conditions=raw, foods=raw)
    assert submission.conditions == expected
    assert submission.foods == expected
