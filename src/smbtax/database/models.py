"""SQLAlchemy models for smbtax database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class BusinessProfile(Base):
    """Single-row regime configuration of the business."""

    __tablename__ = "business_profile"

    id = Column(Integer, primary_key=True)
    regime = Column(String, nullable=False)
    has_fixed_fee_addon = Column(Boolean, default=False, nullable=False)
    has_employees = Column(Boolean, default=False, nullable=False)
    fixed_fee_account = Column(String, nullable=True)
    inn = Column(String, nullable=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(String(32), primary_key=True)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    direction = Column(String, nullable=False)
    category = Column(String, nullable=False)
    note = Column(String, nullable=False, default="")
    account_number = Column(String, nullable=True)
    regime_tag = Column(String, nullable=True)
    # Order of same-day rows inside the ledger
    position = Column(Integer, nullable=False, default=0)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
