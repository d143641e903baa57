from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BriefingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meeting_id: str = Field(alias="meetingId")
    user_id: str = Field(alias="userId")


class BriefingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message_id: Optional[str] = Field(None, alias="messageId")


class BriefingPreview(BaseModel):
    ok: bool = True
    subject: str
    html: str
    text: str
