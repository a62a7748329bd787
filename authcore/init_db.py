"""Database initialization script."""

import logging

from authcore.database import Base, engine
from authcore.models import User  # noqa: F401  registers the users table

logger = logging.getLogger(__name__)


def create_tables():
    """Create all database tables."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
