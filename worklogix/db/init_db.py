import asyncio
import logging
from worklogix.core.database import engine, async_session_maker
from worklogix.models import *  # Import all models
from worklogix.models.base import Base
from worklogix.services.attendance.reward_service import RewardService

logger = logging.getLogger(__name__)


async def create_tables():
    """Create all database tables"""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created successfully")

    except Exception as e:
        logger.error(f"Error creating tables: {str(e)}")
        raise


async def init_db():
    """Create tables and seed the badge catalog"""
    try:
        await create_tables()

        async with async_session_maker() as session:
            await RewardService(session).initialize_badges()

        logger.info("Database initialized successfully")

    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise


if __name__ == "__main__":
    from worklogix.core.logging_config import setup_logging

    setup_logging()
    asyncio.run(init_db())
