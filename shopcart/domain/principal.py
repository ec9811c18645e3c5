# shopcart/domain/principal.py
import uuid
from dataclasses import dataclass, field

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    """Uwierzytelniony uzytkownik przekazany z bramki, nigdy parsowany w logice koszyka."""

    user_id: uuid.UUID
    roles: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles
