from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from outage_planner.core.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
