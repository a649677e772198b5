from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database

from app.core.config import Settings, get_app_settings
from app.core.database import get_db
from app.models.schemas import MessageResponse
from app.models.student_schemas import StudentCreate, StudentOut, StudentPage, StudentUpdate, StudentWithMarks
from app.services import students as student_service
from app.utils.validation import coerce_page_param

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, db: Database = Depends(get_db)):
    """
    Create a student. Email is stored trimmed and lowercased;
    a second student with the same email gets 409.
    """
    return student_service.create_student(db, payload)


@router.get("", response_model=StudentPage)
def list_students(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Paginated list, ?page=1&limit=10. Non-positive or unparsable values fall back to sane defaults."""
    return student_service.list_students(
        db,
        page=coerce_page_param(page, 1),
        limit=coerce_page_param(limit, settings.DEFAULT_PAGE_LIMIT),
    )


@router.get("/{student_id}", response_model=StudentWithMarks)
def get_student(student_id: str, db: Database = Depends(get_db)):
    return student_service.get_student_with_marks(db, student_id)


@router.put("/{student_id}", response_model=StudentOut)
def update_student(student_id: str, payload: StudentUpdate, db: Database = Depends(get_db)):
    return student_service.update_student(db, student_id, payload)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(student_id: str, db: Database = Depends(get_db)):
    """Delete a student and cascade to their marks record."""
    return student_service.delete_student(db, student_id)
