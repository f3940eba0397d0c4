"""Base repository class with common CRUD operations."""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Query, Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Repositories flush but never commit; the owning session scope decides.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id(user_id)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: uuid.UUID) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def create(self, **kwargs) -> T:
        """Create a new record. Raises IntegrityError on constraint violations."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

    def update(self, id: uuid.UUID, **kwargs) -> T | None:
        """Update an existing record."""
        instance = self.get_by_id(id)
        if instance:
            for key, value in kwargs.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)
            self.session.flush()
        return instance

    def delete(self, id: uuid.UUID) -> T | None:
        """Delete a record by ID and return the removed instance."""
        instance = self.get_by_id(id)
        if instance:
            self.session.delete(instance)
            self.session.flush()
        return instance

    def exists_where(self, **filters: Any) -> bool:
        """Check if any record exists matching filters."""
        query = self._apply_filters(self.session.query(self.model), filters)
        result = self.session.query(query.exists()).scalar()
        return bool(result) if result is not None else False

    def _apply_filters(self, query: Query, filters: dict[str, Any]) -> Query:
        for key, value in filters.items():
            if not hasattr(self.model, key):
                raise ValueError(f"Unknown filter key for {self.model.__name__}: {key}")
            query = query.filter(getattr(self.model, key) == value)
        return query
