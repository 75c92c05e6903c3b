from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.log import logger
from settings import POSTGRES_HOST, POSTGRES_PORT
from models import db


def database_is_reachable() -> bool:
    try:
        with db() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"postgres health check failed: {e}")
        return False
    return True


def health_check():
    logger.info("run entry console with")
    logger.info(f"postgres host = {POSTGRES_HOST}")
    logger.info(f"postgres port = {POSTGRES_PORT}")
    if database_is_reachable():
        logger.info("successfully connect to postgres")
    else:
        logger.warning("postgres is not reachable, scans will fail until it is")
