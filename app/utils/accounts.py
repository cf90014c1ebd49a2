from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.config import settings
from app.models.user import User, Role
from app.utils.hashing import BCRYPT_MAX_BYTES, hash_password, normalize_email

import logging
logger = logging.getLogger("app.auth")


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    q = db.query(User.id).filter(func.lower(User.email) == normalize_email(email))
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    return q.first() is not None


def required_text(value: str, label: str) -> str:
    """Trimmed value, or 400 when nothing is left."""
    value = value.strip()
    if not value:
        raise HTTPException(status_code=400, detail=f"{label} cannot be empty")
    return value


def create_user(db: Session, name: str, email: str, password: str, role: Role) -> User:
    name = required_text(name, "Name")
    email = normalize_email(required_text(email, "Email"))
    if email_taken(db, email):
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_bootstrap_admin(db: Session):
    """Create the ADMIN_EMAIL account on first start, if configured."""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return None
    existing = get_by_email(db, settings.ADMIN_EMAIL)
    if existing:
        return existing
    if len(settings.ADMIN_PASSWORD.encode("utf-8")) > BCRYPT_MAX_BYTES:
        logger.error("ADMIN_PASSWORD is longer than %s bytes, bootstrap admin not created", BCRYPT_MAX_BYTES)
        return None
    admin = create_user(db, settings.ADMIN_NAME, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, Role.ADMIN)
    logger.info("bootstrap admin created id=%s", admin.id)
    return admin
