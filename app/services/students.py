from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.core.database import MARKS, STUDENTS
from app.core.errors import Conflict, NotFound
from app.core.logger import get_logger
from app.models.marks_schemas import SubjectEntry
from app.models.schemas import MessageResponse
from app.models.student_schemas import StudentCreate, StudentOut, StudentPage, StudentUpdate, StudentWithMarks
from app.utils.validation import MAX_INT64, parse_object_id

logger = get_logger("students")

EMAIL_EXISTS = "Email already exists"
STUDENT_NOT_FOUND = "Student not found"


def create_student(db: Database, payload: StudentCreate) -> StudentOut:
    now = datetime.now(timezone.utc)
    doc = {
        "name": payload.name.strip(),
        "email": payload.email.strip().lower(),
        "age": payload.age,
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        result = db[STUDENTS].insert_one(doc)
    except DuplicateKeyError as e:
        logger.info("Rejected duplicate email %s", doc["email"])
        raise Conflict(EMAIL_EXISTS) from e

    doc["_id"] = result.inserted_id
    logger.info("Created student %s", result.inserted_id)
    return StudentOut.model_validate(doc)


def list_students(db: Database, page: int = 1, limit: int = 10) -> StudentPage:
    """
    One page of students in natural storage order, plus the collection total.
    The slice and the count are two separate reads; total may be stale.
    """
    page = min(max(1, page), MAX_INT64)
    limit = min(max(1, limit), MAX_INT64)
    skip = min((page - 1) * limit, MAX_INT64)

    cursor = db[STUDENTS].find({}).skip(skip).limit(limit)
    data = [StudentOut.model_validate(doc) for doc in cursor]
    total = db[STUDENTS].count_documents({})

    return StudentPage(data=data, page=page, limit=limit, total=total)


def get_student_with_marks(db: Database, student_id: str) -> StudentWithMarks:
    oid = parse_object_id(student_id, "id")

    student = db[STUDENTS].find_one({"_id": oid})
    if not student:
        raise NotFound(STUDENT_NOT_FOUND)

    marks_doc = db[MARKS].find_one({"studentId": oid})
    subjects = marks_doc.get("subjects", []) if marks_doc else []

    return StudentWithMarks(
        student=StudentOut.model_validate(student),
        marks=[SubjectEntry.model_validate(s) for s in subjects],
    )


def update_student(db: Database, student_id: str, payload: StudentUpdate) -> StudentOut:
    oid = parse_object_id(student_id, "id")

    changes = payload.model_dump(exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
    if "email" in changes:
        changes["email"] = changes["email"].strip().lower()
    changes["updatedAt"] = datetime.now(timezone.utc)

    try:
        updated = db[STUDENTS].find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError as e:
        logger.info("Rejected duplicate email %s for student %s", changes.get("email"), oid)
        raise Conflict(EMAIL_EXISTS) from e

    if not updated:
        raise NotFound(STUDENT_NOT_FOUND)

    logger.info("Updated student %s (%s)", oid, ", ".join(k for k in changes if k != "updatedAt") or "no fields")
    return StudentOut.model_validate(updated)


def delete_student(db: Database, student_id: str) -> MessageResponse:
    """
    Delete the student, then its marks record.

    The two deletes are not atomic: if the second one fails the marks record
    is left orphaned (see app.scripts.reconcile_marks).
    """
    oid = parse_object_id(student_id, "id")

    deleted = db[STUDENTS].find_one_and_delete({"_id": oid})
    if not deleted:
        raise NotFound(STUDENT_NOT_FOUND)

    # cascade; a missing marks record is fine
    result = db[MARKS].delete_one({"studentId": oid})
    logger.info("Deleted student %s (marks records removed: %d)", oid, result.deleted_count)

    return MessageResponse(message="Student and marks deleted")
