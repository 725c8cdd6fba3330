"""Domain layer for horadofrango application.

The store lives in ``horadofrango.domain.store``; it is not re-exported here
because the database mappers import the entities through this package.
"""

from horadofrango.domain.errors import DomainError, NotFoundError, ValidationError

__all__ = ["DomainError", "NotFoundError", "ValidationError"]
