"""SQLAlchemy models for seder database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    default_rate = Column(Numeric(12, 2), nullable=True)
    is_archived = Column(Boolean, default=False, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    income_entries = relationship("IncomeEntry", back_populates="client")


class Category(Base):
    """Income category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)
    color = Column(String(30), nullable=False)
    icon = Column(String(30), nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    income_entries = relationship("IncomeEntry", back_populates="category")


class IncomeEntry(Base):
    """Income entry (job) model."""

    __tablename__ = "income_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    client_name = Column(String, nullable=False, default="", index=True)
    amount_gross = Column(Numeric(12, 2), nullable=False)
    amount_paid = Column(Numeric(12, 2), nullable=False, default=0)
    vat_rate = Column(Numeric(5, 2), nullable=False, default=18)
    includes_vat = Column(Boolean, nullable=False, default=True)
    invoice_status = Column(String(20), nullable=False, default="draft")
    payment_status = Column(String(20), nullable=False, default="unpaid")
    invoice_sent_date = Column(Date, nullable=True)
    paid_date = Column(Date, nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    legacy_category = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    calendar_event_id = Column(String(255), unique=True, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    client = relationship("Client", back_populates="income_entries")
    category = relationship("Category", back_populates="income_entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
