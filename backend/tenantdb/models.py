"""SQLAlchemy ORM models. Every tenant database carries the same schema."""

from sqlalchemy import Column, Date, DateTime, Integer, String

from tenantdb.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)


class ExhibitionLocation(Base):
    """Where a vehicle is on display at a dealer, and for how long."""

    __tablename__ = "exhibition_locations"

    # Composite primary key
    country_code = Column(String(2), primary_key=True)
    company_code = Column(Integer, primary_key=True)
    dealer_code = Column(Integer, primary_key=True)
    chassis = Column(String(17), primary_key=True)
    sequence = Column(Integer, primary_key=True)
    location_code = Column(String(10), primary_key=True)

    starts_on = Column(Date)
    ends_on = Column(Date)
    address = Column(String(255))
    length = Column(Integer)
    kind = Column(String(20))
    approved_on = Column(Date)
    change_status = Column(String(1))

    # Audit
    created_by = Column(String(50))
    created_at = Column(DateTime(timezone=True))
    updated_by = Column(String(50))
    updated_at = Column(DateTime(timezone=True))
