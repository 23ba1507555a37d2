from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(database_url: str):
    connect_args = {}
    engine_kwargs = {}

    # Cek apakah URL database menggunakan SQLite
    if database_url.startswith("sqlite"):
        # check_same_thread=False wajib khusus buat SQLite
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory SQLite: satu koneksi dipakai bersama
            engine_kwargs["poolclass"] = StaticPool

    return create_engine(database_url, connect_args=connect_args, **engine_kwargs)


def build_session_factory(engine):
    # expire_on_commit=False: rows stay readable after the session closes
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
