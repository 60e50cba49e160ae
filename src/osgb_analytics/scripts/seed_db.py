"""
Create the tables and load the raw CSV exports into the database.
Run with: python -m osgb_analytics.scripts.seed_db
"""
import logging
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.load.load_to_db import load_all

if __name__ == "__main__":
    setup_logging()
    log = logging.getLogger(__name__)

    log.info("Seeding OSGB database")
    stats = load_all()
    log.info(f"Seed complete: {stats}")
