import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shopcart.api.auth import require_admin
from shopcart.api.responses import success
from shopcart.data.database import get_db
from shopcart.domain.schemas import ProductIn
from shopcart.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(page: int = Query(1), limit: int = Query(10), db: Session = Depends(get_db)):
    return success(200, "data fetched successfully", ProductService(db).list_products(page, limit))


@router.get("/{product_id}")
def get_product(product_id: uuid.UUID, db: Session = Depends(get_db)):
    return success(200, "data fetched successfully", ProductService(db).get_product(product_id))


@router.post("", dependencies=[Depends(require_admin)])
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    return success(201, "Product created", ProductService(db).create_product(payload))
