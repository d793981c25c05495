"""
Database table creation script for the Customer Service
This script tests the database connection and creates the persons and
clients tables. Run it after setting up your database.
"""

import asyncio
import logging

from sqlalchemy import func, select

from database import db_manager
from models import Client, Person

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def create_tables() -> bool:
    """
    Create all database tables defined in the models
    """
    try:
        logger.info("Starting database table creation...")

        if not await db_manager.test_connection():
            logger.error("Database connection failed - cannot create tables")
            return False

        await db_manager.create_tables()

        async with db_manager.get_session() as session:
            persons = await session.scalar(select(func.count()).select_from(Person))
            clients = await session.scalar(select(func.count()).select_from(Client))
            logger.info(f"Tables accessible - persons: {persons}, clients: {clients}")

        return True

    except Exception as e:
        logger.error(f"Failed to create database tables: {e}")
        return False

    finally:
        await db_manager.dispose()


def main():
    logger.info("Customer Service - Database Setup")
    logger.info("=" * 50)

    success = asyncio.run(create_tables())

    if success:
        logger.info("Database setup completed successfully!")
        logger.info("You can now start the API server with: python main.py")
    else:
        logger.error("Database setup failed!")
        logger.error("Please check your database configuration and try again")

    return success


if __name__ == "__main__":
    main()
