import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shopcart.api.auth import get_current_principal
from shopcart.api.responses import success
from shopcart.data.database import get_db
from shopcart.domain.schemas import LoginIn, RegisterIn
from shopcart.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register")
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user = UserService(db).register(payload)
    return success(200, "user registered successfully", user)


@router.post("/login")
def login(payload: LoginIn, db: Session = Depends(get_db)):
    # token wystawia bramka, tu tylko weryfikacja hasla
    user = UserService(db).login(payload)
    return success(200, "logged in successfully", user)


@router.get("", dependencies=[Depends(get_current_principal)])
def search_users(
    fullname: str | None = None,
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
):
    return success(200, "data fetched successfully", UserService(db).search(fullname, page, limit))


@router.get("/{user_id}", dependencies=[Depends(get_current_principal)])
def get_user(user_id: uuid.UUID, db: Session = Depends(get_db)):
    return success(200, "data fetched successfully", UserService(db).get_user(user_id))
