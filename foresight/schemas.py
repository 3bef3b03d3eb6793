"""Pydantic schemas for pipeline results and FastAPI endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

QuestionType = Literal["open-text", "multiple-choice", "rating-scale"]

RATING_SCALE_LABELS = ("1", "2", "3", "4", "5")
RATING_SCALE_ICON = "star_border"
RATING_SCALE_TOP_ICON = "star"

MIN_QUESTIONS = 5
MAX_QUESTIONS = 7
MIN_CHOICES = 3
MAX_CHOICES = 5
MIN_FOLLOW_UP_OPTIONS = 2
MAX_FOLLOW_UP_OPTIONS = 4


class _Entity(BaseModel):
    """Values produced by the pipeline: immutable, camelCase on the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Pipeline entities
# ---------------------------------------------------------------------------


class CompanyAnalysis(_Entity):
    category: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)
    competitors: List[str] = Field(..., min_length=3, max_length=5)


class Option(_Entity):
    label: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1, description="Material icon name")

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> Any:
        # Rating scales often come back labelled 1..5 as numbers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Question(_Entity):
    id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    type: QuestionType
    options: List[Option] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Models occasionally number questions with bare integers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_options(self) -> "Question":
        count = len(self.options)
        if self.type == "open-text":
            if count:
                raise ValueError("open-text questions must not have options")
        elif self.type == "multiple-choice":
            if not MIN_CHOICES <= count <= MAX_CHOICES:
                raise ValueError(
                    f"multiple-choice questions need {MIN_CHOICES}-{MAX_CHOICES} options, got {count}"
                )
        else:
            labels = tuple(option.label for option in self.options)
            if labels != RATING_SCALE_LABELS:
                raise ValueError("rating-scale options must be labelled 1 to 5 in order")
            icons = [option.icon for option in self.options]
            if len(set(icons[:4])) != 1 or icons[4] == icons[0]:
                raise ValueError("rating-scale options 1-4 share one icon and option 5 uses a distinct one")
        return self


class Questionnaire(RootModel[List[Question]]):
    """An initial questionnaire: 5-7 questions with unique ids."""

    @model_validator(mode="after")
    def _check_questions(self) -> "Questionnaire":
        count = len(self.root)
        if not MIN_QUESTIONS <= count <= MAX_QUESTIONS:
            raise ValueError(f"expected {MIN_QUESTIONS}-{MAX_QUESTIONS} questions, got {count}")
        ids = [question.id for question in self.root]
        if len(set(ids)) != len(ids):
            raise ValueError("question ids must be unique")
        return self


class ChoiceOptions(RootModel):
    root: List[Option] = Field(..., min_length=MIN_CHOICES, max_length=MAX_CHOICES)


class FollowUp(_Entity):
    follow_up: str = Field(..., alias="followUp", min_length=1)
    options: List[Option] = Field(..., min_length=MIN_FOLLOW_UP_OPTIONS, max_length=MAX_FOLLOW_UP_OPTIONS)


class KeyTheme(_Entity):
    theme: str
    percentage: float = Field(..., ge=0, le=100)
    description: str


class NotableQuote(_Entity):
    quote: str
    context: Optional[str] = None


class Report(_Entity):
    title: str
    executive_summary: str = Field(..., alias="executiveSummary")
    key_themes: List[KeyTheme] = Field(default_factory=list, alias="keyThemes")
    detailed_analysis: str = Field(..., alias="detailedAnalysis")
    actionable_insights: List[str] = Field(default_factory=list, alias="actionableInsights")
    notable_quotes: List[NotableQuote] = Field(default_factory=list, alias="notableQuotes")


# ---------------------------------------------------------------------------
# /api/ai request + response envelopes
# ---------------------------------------------------------------------------


class _LenientRequest(BaseModel):
    """Request bodies accept missing fields so the pipeline reports them as 400s."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AnalyzeCompanyRequest(_LenientRequest):
    company_name: Optional[str] = Field(default=None, alias="companyName")


class GenerateQuestionsRequest(_LenientRequest):
    company_name: Optional[str] = Field(default=None, alias="companyName")
    research_goal: Optional[str] = Field(default=None, alias="researchGoal")
    company_analysis: Optional[Any] = Field(default=None, alias="companyAnalysis")


class GenerateOptionsRequest(_LenientRequest):
    question_text: Optional[str] = Field(default=None, alias="questionText")
    research_goal: Optional[str] = Field(default=None, alias="researchGoal")


class GenerateFollowUpRequest(_LenientRequest):
    original_question: Optional[str] = Field(default=None, alias="originalQuestion")
    user_answer: Optional[str] = Field(default=None, alias="userAnswer")
    language: Optional[str] = None


class GenerateReportRequest(_LenientRequest):
    responses: Optional[Any] = None
    research_goal: Optional[str] = Field(default=None, alias="researchGoal")


class AnalyzeCompanyResponse(BaseModel):
    analysis: CompanyAnalysis


class QuestionsResponse(BaseModel):
    questions: List[Question]


class OptionsResponse(BaseModel):
    options: List[Option]


class ReportResponse(BaseModel):
    report: Report


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


# ---------------------------------------------------------------------------
# Projects, profiles, text-to-speech
# ---------------------------------------------------------------------------


class ProjectCreate(_LenientRequest):
    company_name: Optional[str] = Field(default=None, alias="companyName")
    research_goal: Optional[str] = Field(default=None, alias="researchGoal")
    status: Optional[str] = None
    questions: Optional[List[Any]] = None
    company_analysis: Optional[Any] = Field(default=None, alias="companyAnalysis")
    report: Optional[Any] = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    company_name: str = Field(..., alias="companyName")
    research_goal: str = Field(..., alias="researchGoal")
    status: str
    questions: List[Any] = Field(default_factory=list)
    company_analysis: Optional[Any] = Field(default=None, alias="companyAnalysis")
    report: Optional[Any] = None
    responses: List[Any] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")


class ProjectEnvelope(BaseModel):
    project: ProjectOut


class ProfileCreate(_LenientRequest):
    email: Optional[str] = None


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str


class ProfileEnvelope(BaseModel):
    profile: ProfileOut


class ResponseAppend(_LenientRequest):
    response: Optional[Any] = None


class TTSRequest(_LenientRequest):
    text: Optional[str] = None
