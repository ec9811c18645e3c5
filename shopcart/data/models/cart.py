# shopcart/data/models/cart.py
import uuid

from sqlalchemy import Column, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship

from shopcart.data.database import Base
from shopcart.data.models.user import utcnow


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # jeden koszyk na usera, soft delete nie zwalnia user_id
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )

    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
    )
