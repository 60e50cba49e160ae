"""
Check the database connection and list tables.
Run with: python -m osgb_analytics.scripts.check_db
"""
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from osgb_analytics.core.db import get_engine
from osgb_analytics.models.tables import Base

def main() -> int:
    try:
        engine = get_engine()
        insp = inspect(engine)
        print("Database Connection: SUCCESS\n")
        print("Tables in database:")

        tables = [t for t in insp.get_table_names() if t in Base.metadata.tables]
        if not tables:
            print("  No tables found")
        with engine.connect() as conn:
            for name in tables:
                count = conn.execute(select(func.count()).select_from(Base.metadata.tables[name])).scalar_one()
                print(f"  - {name}: {count} rows")
        return 0
    except SQLAlchemyError as e:
        print("Database Connection: FAILED")
        print(f"Error: {e}")
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
