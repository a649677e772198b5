from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from app.core.database import get_db
from app.models.marks_schemas import AddMarkRequest, MarksRecordOut, RemoveSubjectRequest, RemoveSubjectResponse, SubjectEntry
from app.services import marks as marks_service

router = APIRouter(prefix="/marks", tags=["Marks"])


@router.post("", response_model=MarksRecordOut, status_code=status.HTTP_201_CREATED)
def add_mark(payload: AddMarkRequest, db: Database = Depends(get_db)):
    """
    Add ONE subject entry to the student's marks record (created on first call).
    Posting the same subject twice stores two entries.
    """
    return marks_service.add_subject(db, payload)


@router.get("/student/{student_id}", response_model=List[SubjectEntry])
def get_marks_by_student(student_id: str, db: Database = Depends(get_db)):
    return marks_service.list_subjects(db, student_id)


@router.delete("/student/{student_id}/subject", response_model=RemoveSubjectResponse)
def delete_subject(student_id: str, payload: RemoveSubjectRequest, db: Database = Depends(get_db)):
    """Body: {"subject": "Math"}. Matching ignores case and surrounding whitespace."""
    return marks_service.remove_subject(db, student_id, payload.subject)
