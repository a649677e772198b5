# app/scripts/reconcile_marks.py
"""
Clean up marks records left behind when a student delete succeeded but the
cascading marks delete did not.

    python -m app.scripts.reconcile_marks
"""
from app.core.config import get_settings
from app.core.database import connect, get_database
from app.core.logger import get_logger
from app.services.marks import remove_orphaned_marks

logger = get_logger("reconcile")


def main():
    settings = get_settings()
    client = connect(settings)
    try:
        removed = remove_orphaned_marks(get_database(client, settings))
        logger.info("Reconcile finished, %d orphaned marks record(s) removed", removed)
    finally:
        client.close()


if __name__ == "__main__":
    main()
