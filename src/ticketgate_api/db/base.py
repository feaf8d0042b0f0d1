from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for registrant-store models."""


# Import models to ensure metadata registration for Alembic
try:  # pragma: no cover - import side effects only
    import ticketgate_api.models  # noqa: F401
except ImportError:  # pragma: no cover - partial environments during migrations
    pass
