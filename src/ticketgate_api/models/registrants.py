"""Per-role registrant tables.

Each role table was added by a different registration form and the column
names drifted accordingly; the scan engine discovers ticket columns at runtime
instead of relying on these declarations.
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from ticketgate_api.db.base import Base


class Speaker(Base):
    __tablename__ = "speakers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    mobile = Column(String, nullable=True)
    organization = Column(String, nullable=True)
    ticket_code = Column(String(64), nullable=True, index=True)
    ticket_category = Column(String, nullable=True)
    payment_status = Column(String(32), nullable=True)
    tx_ref = Column("txId", String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    mobile = Column(String, nullable=True)
    company = Column(String, nullable=True)
    ticket_code = Column(String(64), nullable=True, index=True)
    ticket_category = Column(String, nullable=True)
    payment_status = Column(String(32), nullable=True)
    tx_id = Column(String, nullable=True)
    slots = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Partner(Base):
    __tablename__ = "partners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    org = Column(String, nullable=True)
    code = Column(String(64), nullable=True, index=True)
    category = Column(String, nullable=True)
    # Partners settle offline; "status" doubles as the payment status.
    status = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
