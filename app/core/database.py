# app/core/database.py
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from app.core.config import Settings
from app.core.logger import get_logger

logger = get_logger("database")

STUDENTS = "students"
MARKS = "marks"


def connect(settings: Settings) -> MongoClient:
    client = MongoClient(settings.MONGO_URI)
    logger.info("MongoDB client created for database '%s'", settings.MONGO_DB_NAME)
    return client


def get_database(client: MongoClient, settings: Settings) -> Database:
    return client[settings.MONGO_DB_NAME]


def ensure_indexes(db: Database) -> None:
    """
    Uniqueness lives in the storage engine:
      - one student per email
      - one marks record per student
    """
    db[STUDENTS].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    db[MARKS].create_index([("studentId", ASCENDING)], unique=True, name="studentId_unique")


def get_db(request: Request) -> Database:
    return request.app.state.db
