import uuid

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from shopcart.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: uuid.UUID) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def exists(self, username: str, email: str) -> bool:
        return self.db.execute(
            select(UserModel.id).where(
                or_(UserModel.username == username, UserModel.email == email)
            )
        ).first() is not None

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def search(self, fullname: str | None, offset: int, limit: int) -> tuple[list[UserModel], int]:
        query = select(UserModel)
        if fullname:
            query = query.where(UserModel.fullname.ilike(f"%{fullname}%"))

        total = self.db.execute(
            select(func.count()).select_from(query.subquery())
        ).scalar_one()
        rows = self.db.execute(
            query.order_by(UserModel.created_at).offset(offset).limit(limit)
        ).scalars()
        return list(rows), total
