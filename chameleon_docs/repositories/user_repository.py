"""User repository."""

from typing import Optional

from ..exceptions import UserNotFoundError
from ..models import User
from .base import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    model_class = User
    not_found_error = UserNotFoundError

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None
