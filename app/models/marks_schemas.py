from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.schemas import NonEmptyStr, NonNegativeInt, ObjectIdParam, ObjectIdStr


class SubjectEntry(BaseModel):
    subject: str
    marks: int


class AddMarkRequest(BaseModel):
    studentId: ObjectIdParam
    subject: NonEmptyStr
    marks: NonNegativeInt


class RemoveSubjectRequest(BaseModel):
    subject: NonEmptyStr


class MarksRecordOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(alias="_id")
    studentId: ObjectIdStr
    subjects: List[SubjectEntry] = []
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class RemoveSubjectResponse(BaseModel):
    message: str
    subjects: List[SubjectEntry]
