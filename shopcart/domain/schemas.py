# shopcart/domain/schemas.py
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter

from shopcart.data.models.order import OrderStatus

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Koperta odpowiedzi sukcesu."""

    status: int
    message: str
    data: T | None = None


class ApiError(BaseModel):
    """Koperta odpowiedzi bledu."""

    status: int
    message: str
    error: Any = None


# ------------------------------------------------------------------ cart

class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: uuid.UUID
    quantity: int = Field(..., gt=0, description="Ilosc produktu (musi byc > 0)")


class CartItemOut(BaseModel):
    """Pozycja koszyka - to samo trafia do cache jako JSON."""

    id: uuid.UUID
    cart_id: uuid.UUID
    product_id: uuid.UUID
    quantity: int
    added_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# payload cache "cart:<id>" to lista pozycji
CartItemList = TypeAdapter(List[CartItemOut])


class CartOut(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    added_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartDetailOut(CartOut):
    items: List[CartItemOut] = []


# ------------------------------------------------------------------ users

class RegisterIn(BaseModel):
    fullname: str = Field(..., min_length=2, max_length=50)
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserOut(BaseModel):
    id: uuid.UUID
    fullname: str
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int


class UserPage(BaseModel):
    users: List[UserOut]
    meta: PageMeta


# ------------------------------------------------------------------ products

class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(0, ge=0)


class ProductOut(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    price: Decimal
    stock: int = Field(validation_alias="number_of_stock")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProductPage(BaseModel):
    products: List[ProductOut]
    meta: PageMeta


# ------------------------------------------------------------------ orders

class OrderItemOut(BaseModel):
    product_id: uuid.UUID
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    order_number: str
    status: OrderStatus
    subtotal: Decimal
    total_amount: Decimal
    created_at: datetime
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)
