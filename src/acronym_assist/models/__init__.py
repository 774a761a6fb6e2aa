"""SQLAlchemy models for database schema."""

# Import all models here to ensure they are registered with Base.metadata

from .acronym import Acronym
from .prompt import Prompt

__all__ = [
    "Acronym",
    "Prompt",
]
