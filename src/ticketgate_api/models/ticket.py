from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func

from ticketgate_api.db.base import Base


class Ticket(Base):
    """Canonical ticket row issued by the registration flow."""

    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_code = Column(String(64), nullable=False, unique=True, index=True)
    # Legacy rows written before ticket_code existed
    code = Column(String(64), nullable=True, index=True)
    entity_type = Column(String(32), nullable=True)
    entity_id = Column(String(64), nullable=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    company = Column(String, nullable=True)
    category = Column(String, nullable=True)
    payment_status = Column(String(32), nullable=True)
    transaction_id = Column(String, nullable=True)
    used = Column(Boolean, nullable=False, default=False, server_default=false())
    printed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
