"""Invariants enforced by the pipeline's pydantic models."""
import pytest
from pydantic import ValidationError

from foresight.schemas import ChoiceOptions, CompanyAnalysis, FollowUp, Question, Questionnaire, Report

RATING_OPTIONS = [
    {"label": "1", "icon": "star_border"},
    {"label": "2", "icon": "star_border"},
    {"label": "3", "icon": "star_border"},
    {"label": "4", "icon": "star_border"},
    {"label": "5", "icon": "star"},
]


def _choices(count):
    return [{"label": f"Choice {i}", "icon": "check_box"} for i in range(count)]


def test_rating_scale_accepts_canonical_options():
    question = Question.model_validate(
        {"id": "q1", "text": "How satisfied are you?", "type": "rating-scale", "options": RATING_OPTIONS}
    )
    assert [option.label for option in question.options] == ["1", "2", "3", "4", "5"]
    assert len({option.icon for option in question.options[:4]}) == 1
    assert question.options[4].icon != question.options[0].icon


@pytest.mark.parametrize(
    "options",
    [
        RATING_OPTIONS[:4],
        list(reversed(RATING_OPTIONS)),
        RATING_OPTIONS[:4] + [{"label": "5", "icon": "star_border"}],
        [{"label": "1", "icon": "star"}] + RATING_OPTIONS[1:],
    ],
)
def test_rating_scale_rejects_other_layouts(options):
    with pytest.raises(ValidationError):
        Question.model_validate({"id": "q1", "text": "Rate us", "type": "rating-scale", "options": options})


@pytest.mark.parametrize("count", [3, 4, 5])
def test_multiple_choice_accepts_three_to_five(count):
    question = Question.model_validate(
        {"id": "q2", "text": "Pick one", "type": "multiple-choice", "options": _choices(count)}
    )
    assert len(question.options) == count


@pytest.mark.parametrize("count", [0, 2, 6])
def test_multiple_choice_rejects_other_counts(count):
    with pytest.raises(ValidationError):
        Question.model_validate({"id": "q2", "text": "Pick one", "type": "multiple-choice", "options": _choices(count)})


def test_open_text_has_no_options():
    question = Question.model_validate({"id": "q3", "text": "Tell us more", "type": "open-text"})
    assert question.options == []
    with pytest.raises(ValidationError):
        Question.model_validate({"id": "q3", "text": "Tell us more", "type": "open-text", "options": _choices(3)})


def test_unknown_question_type_is_rejected():
    with pytest.raises(ValidationError):
        Question.model_validate({"id": "q4", "text": "?", "type": "slider", "options": []})


def test_integer_ids_are_coerced():
    question = Question.model_validate({"id": 7, "text": "Why?", "type": "open-text", "options": []})
    assert question.id == "7"


def test_integer_rating_labels_are_coerced():
    options = [{"label": index, "icon": option["icon"]} for index, option in enumerate(RATING_OPTIONS, start=1)]
    question = Question.model_validate({"id": "q1", "text": "Rate us", "type": "rating-scale", "options": options})
    assert [option.label for option in question.options] == ["1", "2", "3", "4", "5"]


def _open(qid):
    return {"id": qid, "text": "Why?", "type": "open-text", "options": []}


def test_questionnaire_bounds_and_unique_ids():
    Questionnaire.model_validate([_open(f"q{i}") for i in range(5)])
    Questionnaire.model_validate([_open(f"q{i}") for i in range(7)])
    with pytest.raises(ValidationError):
        Questionnaire.model_validate([_open(f"q{i}") for i in range(4)])
    with pytest.raises(ValidationError):
        Questionnaire.model_validate([_open(f"q{i}") for i in range(8)])
    with pytest.raises(ValidationError):
        Questionnaire.model_validate([_open("dup")] * 5)


def test_company_analysis_competitor_bounds():
    base = {"category": "Retail", "domain": "acme.com", "summary": "Anvils."}
    CompanyAnalysis.model_validate({**base, "competitors": ["A", "B", "C"]})
    with pytest.raises(ValidationError):
        CompanyAnalysis.model_validate({**base, "competitors": ["A", "B"]})
    with pytest.raises(ValidationError):
        CompanyAnalysis.model_validate({**base, "competitors": list("ABCDEF")})


def test_choice_options_bounds():
    assert len(ChoiceOptions.model_validate(_choices(3)).root) == 3
    with pytest.raises(ValidationError):
        ChoiceOptions.model_validate(_choices(2))


def test_follow_up_uses_camel_case_on_the_wire():
    follow_up = FollowUp.model_validate({"followUp": "Why so?", "options": _choices(2)})
    assert follow_up.follow_up == "Why so?"
    assert follow_up.model_dump(by_alias=True)["followUp"] == "Why so?"
    with pytest.raises(ValidationError):
        FollowUp.model_validate({"followUp": "Why so?", "options": _choices(5)})


def test_report_theme_percentage_range_and_optional_context():
    report = Report.model_validate(
        {
            "title": "Pricing study",
            "executiveSummary": "Price matters.",
            "keyThemes": [{"theme": "Cost", "percentage": 62.5, "description": "Too pricey"}],
            "detailedAnalysis": "Long text.",
            "actionableInsights": ["Offer a starter tier"],
            "notableQuotes": [{"quote": "It costs too much"}],
        }
    )
    assert report.notable_quotes[0].context is None
    with pytest.raises(ValidationError):
        Report.model_validate(
            {
                "title": "t",
                "executiveSummary": "s",
                "keyThemes": [{"theme": "Cost", "percentage": 140, "description": "d"}],
                "detailedAnalysis": "d",
            }
        )


def test_entities_are_immutable():
    question = Question.model_validate(_open("q1"))
    with pytest.raises(ValidationError):
        question.text = "changed"
