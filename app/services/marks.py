from datetime import datetime, timezone
from typing import List

from pymongo import ReturnDocument
from pymongo.database import Database

from app.core.database import MARKS, STUDENTS
from app.core.errors import InvalidInput, NotFound
from app.core.logger import get_logger
from app.models.marks_schemas import AddMarkRequest, MarksRecordOut, RemoveSubjectResponse, SubjectEntry
from app.utils.validation import parse_object_id

logger = get_logger("marks")


def add_subject(db: Database, payload: AddMarkRequest) -> MarksRecordOut:
    """
    Append one {subject, marks} entry to the student's marks record,
    creating the record on first use. Same-named subjects are not merged;
    callers wanting replace semantics delete the old entry first.
    """
    oid = parse_object_id(payload.studentId, "studentId")

    if not db[STUDENTS].find_one({"_id": oid}, {"_id": 1}):
        raise NotFound("Student not found")

    entry = {"subject": payload.subject.strip(), "marks": int(payload.marks)}
    now = datetime.now(timezone.utc)

    record = db[MARKS].find_one_and_update(
        {"studentId": oid},
        {
            "$push": {"subjects": entry},
            "$set": {"updatedAt": now},
            "$setOnInsert": {"createdAt": now},
        },
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    logger.info("Added subject '%s' (%d) for student %s", entry["subject"], entry["marks"], oid)
    return MarksRecordOut.model_validate(record)


def list_subjects(db: Database, student_id: str) -> List[SubjectEntry]:
    """No marks record and unknown student both come back as []."""
    oid = parse_object_id(student_id, "studentId")

    record = db[MARKS].find_one({"studentId": oid})
    if not record:
        return []
    return [SubjectEntry.model_validate(s) for s in record.get("subjects", [])]


def remove_subject(db: Database, student_id: str, subject: str) -> RemoveSubjectResponse:
    """
    Remove every entry whose subject matches `subject` ignoring case and
    surrounding whitespace.
    """
    if not subject or not subject.strip():
        raise InvalidInput("Validation failed", [{"path": "subject", "message": "subject is required"}])
    oid = parse_object_id(student_id, "studentId")

    record = db[MARKS].find_one({"studentId": oid})
    if not record:
        raise NotFound("Marks document not found")

    key = subject.strip().lower()
    subjects = record.get("subjects", [])
    remaining = [s for s in subjects if s.get("subject", "").strip().lower() != key]

    if len(remaining) == len(subjects):
        raise NotFound("Subject not found")

    db[MARKS].update_one(
        {"_id": record["_id"]},
        {"$set": {"subjects": remaining, "updatedAt": datetime.now(timezone.utc)}},
    )
    logger.info("Removed %d entries matching '%s' for student %s", len(subjects) - len(remaining), key, oid)

    return RemoveSubjectResponse(
        message="Subject deleted",
        subjects=[SubjectEntry.model_validate(s) for s in remaining],
    )


def remove_orphaned_marks(db: Database) -> int:
    """Delete marks records whose student no longer exists. Returns the count removed."""
    student_ids = set(db[STUDENTS].distinct("_id"))
    orphans = [
        doc["_id"]
        for doc in db[MARKS].find({}, {"studentId": 1})
        if doc.get("studentId") not in student_ids
    ]
    if not orphans:
        return 0

    result = db[MARKS].delete_many({"_id": {"$in": orphans}})
    logger.warning("Removed %d orphaned marks record(s)", result.deleted_count)
    return result.deleted_count
