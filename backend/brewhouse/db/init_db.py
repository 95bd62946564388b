# brewhouse/db/init_db.py

import logging

from brewhouse.db.session import Base, engine
from brewhouse.db import models  # noqa: F401  # registers every table on Base.metadata

logger = logging.getLogger(__name__)


def init() -> None:
    logger.info("creating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("done.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init()
