"""
Create any missing tables without touching existing data.

  python -m app.scripts.ensure_tables   (run from FastAPI/, or anywhere once installed)
"""
from app.database import ensure_tables_exist


def main():
    created = ensure_tables_exist()
    if created:
        print(f"Created tables: {', '.join(created)}")
    print("DB table check complete: created only missing tables.")


if __name__ == "__main__":
    main()
