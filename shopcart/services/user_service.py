import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopcart.data.models.user import UserModel
from shopcart.domain.errors import Conflict, InvalidCredentials, NotFound, ValidationFailed
from shopcart.domain.schemas import LoginIn, PageMeta, RegisterIn, UserOut, UserPage
from shopcart.repos.user_repo import UserRepo
from shopcart.utils.security import hash_password, verify_password
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> UserOut:
        if self.repo.exists(payload.username, payload.email):
            raise Conflict("Username or email already registered")

        user = UserModel(
            fullname=payload.fullname,
            username=payload.username,
            email=payload.email,
            password=hash_password(payload.password),
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError as e:
            # wyscig z innym rejestrujacym sie
            self.repo.db.rollback()
            raise Conflict("Username or email already registered") from e

        logger.info(f"Registered user {created.id}")
        return UserOut.model_validate(created)

    def login(self, payload: LoginIn) -> UserOut:
        user = self.repo.get_user_by_email(payload.email)
        if not user:
            raise ValidationFailed("Invalid credential")

        if not verify_password(payload.password, user.password):
            raise InvalidCredentials()

        return UserOut.model_validate(user)

    def get_user(self, user_id: uuid.UUID) -> UserOut:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return UserOut.model_validate(user)

    def search(self, fullname: str | None, page: int, limit: int) -> UserPage:
        page = max(page, 1)
        limit = limit if limit >= 1 else 10

        users, total = self.repo.search(fullname, (page - 1) * limit, limit)
        return UserPage(
            users=[UserOut.model_validate(u) for u in users],
            meta=PageMeta(page=page, limit=limit, total=total),
        )
