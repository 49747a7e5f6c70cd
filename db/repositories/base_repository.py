"""
Base repository interface for common CRUD operations.
"""

from abc import ABC
from typing import Generic, TypeVar
from sqlalchemy.orm import Query, Session

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """Base repository interface with common CRUD operations."""

    def __init__(self, session: Session, model_class: type):
        self.session = session
        self.model_class = model_class

    def query(self) -> Query:
        """Unfiltered query over the model, for pagination and further filtering."""
        return self.session.query(self.model_class)

    def create(self, **kwargs) -> T:
        """Create a new entity."""
        entity = self.model_class(**kwargs)
        self.session.add(entity)
        self.session.flush()  # Ensure ID is generated
        return entity
