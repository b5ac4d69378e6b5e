# init_db.py

import asyncio
import logging

from homework_helper.db.session import engine, init_models

# Настраиваем логирование
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("DatabaseInit")


async def main():
    """
    Создает таблицы homework_requests, homework_responses и homework_jobs.
    """
    logger.info("--- Starting Database Initialization ---")
    try:
        await init_models(engine)
    except Exception as e:
        logger.error(f"Database initialization FAILED: {e}", exc_info=True)
        raise
    finally:
        await engine.dispose()
    logger.info("--- Database Initialization Finished ---")


if __name__ == "__main__":
    asyncio.run(main())
