from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ApplyTemplateRequest(BaseModel):
    template_id: str


class AnswerSubmission(BaseModel):
    answer: str = ""
    rating: Optional[int] = None


class ConnectCalendarRequest(BaseModel):
    provider: Literal["google", "outlook"]


class ImportEventsRequest(BaseModel):
    event_ids: List[str] = Field(min_length=1)
