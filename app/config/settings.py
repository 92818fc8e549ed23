# app/config/settings.py
# Application configuration loaded from the environment

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Configuration for the task manager application"""

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./task_manager.db")
    DB_SSLMODE = os.getenv("DB_SSLMODE", "require")
    DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

    # Authentication
    SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret-key")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    MIN_PASSWORD_LENGTH = 6

    # Default administrator created when the users table is empty
    DEFAULT_ADMIN = {
        'username': os.getenv("DEFAULT_ADMIN_USERNAME", "admin"),
        'password': os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123"),
        'email': os.getenv("DEFAULT_ADMIN_EMAIL", "admin@company.com"),
        'full_name': os.getenv("DEFAULT_ADMIN_FULL_NAME", "System Administrator"),
    }

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    RELOAD = os.getenv("RELOAD", "true").lower() == "true"

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Get allowed CORS origins from a comma separated list"""
        raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @classmethod
    def is_sqlite(cls, url: str = None) -> bool:
        """Check if the database URL points to SQLite"""
        return (url or cls.DATABASE_URL).lower().startswith("sqlite")

    @classmethod
    def is_postgresql(cls, url: str = None) -> bool:
        """Check if the database URL points to PostgreSQL"""
        return (url or cls.DATABASE_URL).lower().startswith("postgresql")


settings = Settings()
