from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from app.config.settings import DashboardConfig

DATABASE_URL = DashboardConfig.DATABASE_URL

engine = create_engine(
    DATABASE_URL,
    connect_args=DashboardConfig.get_connect_args(DATABASE_URL)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Request-scoped session, overridden in tests
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
