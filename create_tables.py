# create_tables.py
"""
Recreate the database schema and the default administrator.
Every existing row is dropped.
"""

import sys

from app.config.settings import settings
from app.dao import UserDAO
from app.database import Base, SessionLocal, engine, init_db
from app.utils.logging_config import setup_logging


def create_tables() -> bool:
    """Drop and recreate all tables"""
    try:
        Base.metadata.drop_all(bind=engine)
        init_db(engine)
        print("✅ All tables created successfully!")
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        return False

    return create_default_admin()


def create_default_admin() -> bool:
    """Create the default admin user when the users table is empty"""
    db = SessionLocal()
    try:
        admin = UserDAO(db).create_default_admin()
    finally:
        db.close()

    if admin is None:
        print("ℹ️  Admin user already exists")
        return True

    print("✅ Default admin user created!")
    print(f"   Username: {admin.username}")
    print(f"   Password: {settings.DEFAULT_ADMIN['password']}")
    return True


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    if not create_tables():
        sys.exit(1)
