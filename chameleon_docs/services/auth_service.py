"""Authentication service: registration, credentials, profile, account deletion.

Password operations use bcrypt via passlib. Passwords are never stored or
logged in plaintext. Endpoints and actions are thin wrappers over these
functions.
"""

import logging

from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..exceptions import AuthenticationError, EmailInUseError, ValidationError
from ..models import User
from ..repositories import PageRepository, PageViewRepository, ProjectRepository, UserRepository
from ..repositories.user_repository import normalize_email

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a user account.

    Raises ValidationError("Missing fields") when any field is blank and
    EmailInUseError when the email already has an account.
    """
    if not name or not name.strip() or not email or not email.strip() or not password:
        raise ValidationError("Missing fields")

    users = UserRepository(db)
    if users.email_exists(email):
        raise EmailInUseError()

    user = users.add(User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=bcrypt.hash(password),
    ))
    db.commit()
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Validate credentials and return the user.

    Unknown email, wrong password and password-less accounts all raise the
    same AuthenticationError.
    """
    user = UserRepository(db).get_by_email(email or "")
    if user is None or user.password_hash is None:
        raise AuthenticationError("Invalid email or password")
    if not password or not bcrypt.verify(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    return user


def get_user(db: Session, user_id: str) -> User:
    return UserRepository(db).get_by_id(user_id)


def update_profile(db: Session, user_id: str, name=None, image=None) -> User:
    """Update display name and/or avatar. A provided name cannot be blank."""
    user = UserRepository(db).get_by_id(user_id)
    if name is not None:
        if not name.strip():
            raise ValidationError("Name cannot be empty", field="name")
        user.name = name.strip()
    if image is not None:
        user.image = image.strip() or None
    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user_id: str, current_password: str, new_password: str) -> None:
    """Replace the password after re-verifying the current one."""
    user = UserRepository(db).get_by_id(user_id)
    if user.password_hash is None:
        raise ValidationError("This account does not use a password", field="current_password")
    if not current_password:
        raise ValidationError("Current password is required", field="current_password")
    if not bcrypt.verify(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect", field="current_password")
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
            field="new_password",
        )
    user.password_hash = bcrypt.hash(new_password)
    db.commit()
    logger.info("Password changed", extra={"user_id": user_id})


def delete_account(db: Session, user_id: str) -> list[str]:
    """Delete the user, their projects and every page under those projects.

    Each step commits on its own: a failure part-way leaves the earlier
    deletions in place. Returns the slugs of the deleted projects.
    """
    users = UserRepository(db)
    user = users.get_by_id(user_id)
    projects = ProjectRepository(db)
    pages = PageRepository(db)

    owned = projects.list_by_owner(user.email)
    project_ids = [p.id for p in owned]
    slugs = [p.slug for p in owned]
    page_ids = pages.ids_for_projects(project_ids)

    PageViewRepository(db).delete_for_pages(page_ids)
    deleted_pages = pages.delete_for_projects(project_ids)
    db.commit()

    deleted_projects = projects.delete_by_owner(user.email)
    db.commit()

    users.delete(user)
    db.commit()

    logger.info(
        "Account deleted",
        extra={"user_id": user_id, "projects": deleted_projects, "pages": deleted_pages},
    )
    return slugs
