"""SQLAlchemy integration for the JSON:API codec."""

from .resource import SQLAlchemyResource

__all__ = ["SQLAlchemyResource"]
