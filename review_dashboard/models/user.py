# models/user.py

import logging
from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from review_dashboard.models.base_model import BaseModel
from review_dashboard.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class User(BaseModel):
    """
    Modelo do banco de dados para usuários (staff que registra reviews).

    A senha nunca é armazenada em texto puro: ``set_password`` recebe o
    texto puro, valida fora daqui (schema) e grava apenas o hash bcrypt.
    """
    __tablename__ = 'users'

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # ---------- Senha segura com bcrypt ----------
    def set_password(self, password: str) -> None:
        """Define a senha a partir do texto puro, hasheando-a uma única vez."""
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    @staticmethod
    def normalize_email(email: Optional[str]) -> str:
        return (email or '').strip().lower()

    def __repr__(self) -> str:
        return f"<User id={self.id} email='{self.email}'>"
