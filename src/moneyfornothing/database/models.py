"""SQLAlchemy models for the moneyfornothing database."""

from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

# Only one app state row is ever stored
APP_STATE_ROW_ID = 1


class Income(Base):
    """Income source model."""

    __tablename__ = "income"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String(32), nullable=False)
    default_amount = Column(Numeric(12, 2), nullable=False)
    current_amount = Column(Numeric(12, 2), nullable=False)
    paycheck_number = Column(Integer, nullable=True)


class Bill(Base):
    """Bill model."""

    __tablename__ = "bills"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String(32), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    paid = Column(Boolean, default=False, nullable=False)


class Savings(Base):
    """Savings account model."""

    __tablename__ = "savings"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String(32), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)


class AppState(Base):
    """Singleton application state row."""

    __tablename__ = "app_state"

    id = Column(Integer, primary_key=True, default=APP_STATE_ROW_ID)
    last_session_month = Column(String(7), nullable=False)
    version_string = Column(String, nullable=False)
    has_completed_setup = Column(Boolean, default=False, nullable=False)


class SavingsHistoryEntry(Base):
    """Monthly savings total snapshot."""

    __tablename__ = "savings_history"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False)
    month = Column(String(7), nullable=False)
    total = Column(Numeric(14, 2), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory, creating tables if needed."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
