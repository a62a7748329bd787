"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services use repositories for data access rather than
querying SQLAlchemy models directly.

Dependency direction: Services -> Repositories -> Models
"""

from .user_repository import UserRepository

__all__ = [
    "UserRepository",
]
