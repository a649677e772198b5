# app/models/__init__.py

from .marks_schemas import AddMarkRequest, MarksRecordOut, RemoveSubjectRequest, RemoveSubjectResponse, SubjectEntry
from .schemas import MessageResponse
from .student_schemas import StudentCreate, StudentOut, StudentPage, StudentUpdate, StudentWithMarks

__all__ = [
    "AddMarkRequest",
    "MarksRecordOut",
    "MessageResponse",
    "RemoveSubjectRequest",
    "RemoveSubjectResponse",
    "StudentCreate",
    "StudentOut",
    "StudentPage",
    "StudentUpdate",
    "StudentWithMarks",
    "SubjectEntry",
]
