"""SQLAlchemy models package."""

from .ticket import Ticket  # noqa: F401
from .registrants import Partner, Speaker, Visitor  # noqa: F401

__all__ = ["Partner", "Speaker", "Ticket", "Visitor"]
