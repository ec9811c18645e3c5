# shopcart/api/__init__.py
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from shopcart.api.responses import shop_error_handler, store_error_handler, validation_error_handler
from shopcart.api.routers import carts, health, orders, products, users
from shopcart.domain.errors import ShopError


def create_app(lifespan=None) -> FastAPI:
    app = FastAPI(
        title="Shopcart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(ShopError, shop_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
