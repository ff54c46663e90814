"""Create the schema and the default users and categories.

Run with ``python -m notekeeper.seed``. Safe to run repeatedly.
"""

import logging

from sqlalchemy.orm import Session

from . import crud
from .config import settings
from .database import SessionLocal, init_db
from .models import ROLE_ADMIN, ROLE_USER

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"
REGULAR_USERNAMES = [f"user{i}" for i in range(1, 5)]
DEFAULT_CATEGORIES = ["عمومی", "کاری", "شخصی"]


def seed(db: Session, password: str | None = None) -> None:
    password = password or settings.seed_password
    crud.users.upsert_user(db, ADMIN_USERNAME, password, role=ROLE_ADMIN)
    for username in REGULAR_USERNAMES:
        crud.users.upsert_user(db, username, password, role=ROLE_USER)
    for name in DEFAULT_CATEGORIES:
        crud.categories.upsert_category(db, name)
    logger.info("Seeding finished")


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    init_db()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
