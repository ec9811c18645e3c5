from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.api.deps import get_cart_cache
from shopcart.data.database import get_db
from shopcart.services.cart_cache import CartCache

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health():
    return {"status": "ok"}


@router.get("/ready")
def ready(db: Session = Depends(get_db), cache: CartCache = Depends(get_cart_cache)):
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "down"

    cache_state = "ok" if cache.ping() else "down"

    if database != "ok":
        status = "down"
    elif cache_state != "ok":
        # bez redisa koszyk dziala dalej z bazy
        status = "degraded"
    else:
        status = "ok"

    body = {"status": status, "database": database, "cache": cache_state}
    return JSONResponse(status_code=503 if status == "down" else 200, content=body)
