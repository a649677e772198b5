# app/scripts/seed_db.py
"""
Load a few sample students (and their marks) into the configured database.

    python -m app.scripts.seed_db
"""
from typing import Dict, List

from pymongo.database import Database

from app.core.config import get_settings
from app.core.database import connect, ensure_indexes, get_database
from app.core.errors import Conflict
from app.core.logger import get_logger
from app.models.marks_schemas import AddMarkRequest
from app.models.student_schemas import StudentCreate
from app.services.marks import add_subject
from app.services.students import create_student

logger = get_logger("seed")

SAMPLE_STUDENTS = [
    {"name": "Alice Fernandes", "email": "alice@example.com", "age": 20,
     "marks": [("Math", 90), ("Science", 85)]},
    {"name": "Rahul Mehta", "email": "rahul@example.com", "age": 21,
     "marks": [("Math", 72), ("English", 88)]},
    {"name": "Sara Khan", "email": "sara@example.com", "age": 19, "marks": []},
]


def seed(db: Database, records: List[Dict] = SAMPLE_STUDENTS) -> Dict[str, int]:
    created = skipped = subjects = 0

    for rec in records:
        try:
            student = create_student(
                db, StudentCreate(name=rec["name"], email=rec["email"], age=rec["age"])
            )
        except Conflict:
            skipped += 1
            continue
        created += 1

        for subject, marks in rec.get("marks", []):
            add_subject(db, AddMarkRequest(studentId=student.id, subject=subject, marks=marks))
            subjects += 1

    return {"created": created, "skipped": skipped, "subjects": subjects}


def main():
    settings = get_settings()
    client = connect(settings)
    try:
        db = get_database(client, settings)
        ensure_indexes(db)
        result = seed(db)
        logger.info("Seed finished: %s", result)
    finally:
        client.close()


if __name__ == "__main__":
    main()
