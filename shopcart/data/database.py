# shopcart/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shopcart.utils.settings import DATABASE_URL


def build_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        # sqlite w pamieci - jedno polaczenie dzielone miedzy watkami
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def init_db(bind=None) -> None:
    # rejestracja wszystkich modeli w Base.metadata przed create_all
    import shopcart.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
