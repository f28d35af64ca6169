from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from fudge import config  # импортируем настройки

Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    # SQLite: FastAPI гоняет sync-хендлеры в threadpool
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


# Создаём engine
engine = create_engine(config.DATABASE_URL, **_engine_kwargs(config.DATABASE_URL))

# Фабрика сессий
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Создаёт таблицы. Модели импортируются до create_all()."""
    import fudge.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


# Dependency для FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
