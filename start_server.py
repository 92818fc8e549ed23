#!/usr/bin/env python3
"""
Startup script for the Task Manager API
This script starts the FastAPI server with the configured host, port and reload mode
"""

import uvicorn

from app.config.settings import settings


def main():
    print("Starting Task Manager API Server...")
    print(f"Host: {settings.HOST}")
    print(f"Port: {settings.PORT}")
    print(f"Reload: {settings.RELOAD}")
    print(f"Database: {'SQLite' if settings.is_sqlite() else 'PostgreSQL' if settings.is_postgresql() else 'other'}")
    print("=" * 50)

    # Start the server
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
