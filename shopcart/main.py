# shopcart/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from shopcart.api import create_app
from shopcart.data.database import Base, init_db
from shopcart.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # migracje sa poza serwisem, tu tylko create_all dla brakujacych tabel
    init_db()
    logger.info(f"Database ready, tables: {sorted(Base.metadata.tables.keys())}")
    yield


app = create_app(lifespan=lifespan)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
