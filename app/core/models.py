from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


QuestionType = Literal["text", "rating", "multiple_choice"]

SYSTEM_OWNER = "system"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so stored times always compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Meeting(BaseModel):
    id: str
    title: str
    start_time: datetime
    end_time: datetime
    description: str = ""
    location: str = ""
    attendees: List[str] = []
    user_id: str
    is_selected: bool = False
    has_reflection: bool = False
    template_id: Optional[str] = None
    reminder_sent: bool = False
    calendar_event_id: Optional[str] = None
    calendar_provider: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("start_time", "end_time", "created_at")
    @classmethod
    def normalize_times(cls, v: datetime) -> datetime:
        return ensure_aware(v)


class TextQuestionSpec(BaseModel):
    type: Literal["text"] = "text"
    id: str
    question: str
    required: bool = False


class RatingQuestionSpec(BaseModel):
    type: Literal["rating"] = "rating"
    id: str
    question: str
    required: bool = False
    scale: int = Field(5, ge=2, le=10)


class MultipleChoiceQuestionSpec(BaseModel):
    type: Literal["multiple_choice"] = "multiple_choice"
    id: str
    question: str
    required: bool = False
    options: List[str] = Field(min_length=1)


QuestionSpec = Annotated[
    Union[TextQuestionSpec, RatingQuestionSpec, MultipleChoiceQuestionSpec],
    Field(discriminator="type"),
]


class Template(BaseModel):
    id: str
    name: str
    description: str = ""
    questions: List[QuestionSpec]
    is_default: bool = False
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_times(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @property
    def is_system(self) -> bool:
        return self.user_id == SYSTEM_OWNER


class Question(BaseModel):
    """A template question spec copied onto one meeting."""

    id: str
    meeting_id: str
    question: str
    type: QuestionType
    options: Optional[List[str]] = None
    scale: Optional[int] = None
    is_required: bool = False
    order: int
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at")
    @classmethod
    def normalize_times(cls, v: datetime) -> datetime:
        return ensure_aware(v)


class Answer(BaseModel):
    id: str
    question_id: str
    meeting_id: str
    answer: str = ""
    rating: Optional[int] = None
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_times(cls, v: datetime) -> datetime:
        return ensure_aware(v)


class NotificationSettings(BaseModel):
    id: str
    user_id: str
    email_enabled: bool = True
    briefing_minutes_before: int = Field(15, ge=0)
    reminder_enabled: bool = True
    reminder_hours_before: int = Field(24, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class User(BaseModel):
    id: str
    email: EmailStr
    display_name: Optional[str] = None
    access_token: str


class CalendarConnection(BaseModel):
    id: str
    user_id: str
    provider: Literal["google", "outlook"]
    calendar_id: str
    calendar_name: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)


class MeetingDraft(BaseModel):
    title: str
    start_time: datetime
    end_time: datetime
    description: str = ""
    location: str = ""
    attendees: List[str] = []

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title is required")
        return v.strip()

    @model_validator(mode="after")
    def ends_after_start(self):
        if ensure_aware(self.end_time) <= ensure_aware(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class TemplateDraft(BaseModel):
    name: str
    description: str = ""
    questions: List[QuestionSpec] = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    @field_validator("questions")
    @classmethod
    def question_text_required(cls, v):
        for spec in v:
            if not spec.question.strip():
                raise ValueError("every question needs text")
        return v
