import uuid

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, Uuid

from shopcart.data.database import Base
from shopcart.data.models.user import utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    # ile sztuk jest dostepnych do sprzedazy, koszyk tylko czyta
    number_of_stock = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
