import logging

from sqlalchemy.orm import Session

from ..errors import InvalidCredentialsError
from ..models import ROLE_USER, User
from ..security import dummy_verify, hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def authenticate(db: Session, username: str, password: str) -> User:
    """Return the user for valid credentials.

    Unknown usernames and wrong passwords raise the same
    InvalidCredentialsError so callers cannot tell them apart.
    """
    user = get_user_by_username(db, username)
    if user is None:
        dummy_verify()
        logger.warning("Login rejected for %r", username)
        raise InvalidCredentialsError()
    if not verify_password(password, user.password):
        logger.warning("Login rejected for %r", username)
        raise InvalidCredentialsError()
    logger.info("User %s logged in", user.id)
    return user


def upsert_user(db: Session, username: str, password: str, role: str = ROLE_USER) -> User:
    """Create the user if missing; an existing user is left untouched."""
    user = get_user_by_username(db, username)
    if user:
        return user
    user = User(username=username, password=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s)", user.username, user.role)
    return user
