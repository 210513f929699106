from typing import List, Optional

from realty_crm.models.user import User
from realty_crm.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User
    label = "User"
    duplicate_message = "User already exists"

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def get_active(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()
