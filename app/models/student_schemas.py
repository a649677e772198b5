from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.marks_schemas import SubjectEntry
from app.models.schemas import NonEmptyStr, NonNegativeInt, NormalizedEmail, ObjectIdStr


class StudentCreate(BaseModel):
    name: NonEmptyStr
    email: NormalizedEmail
    age: NonNegativeInt


class StudentUpdate(BaseModel):
    """Partial update; fields left out (or sent as null) are not touched."""
    name: Optional[NonEmptyStr] = None
    email: Optional[NormalizedEmail] = None
    age: Optional[NonNegativeInt] = None


class StudentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(alias="_id")
    name: str
    email: str
    age: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class StudentPage(BaseModel):
    data: List[StudentOut]
    page: int
    limit: int
    total: int


class StudentWithMarks(BaseModel):
    student: StudentOut
    marks: List[SubjectEntry]
