import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config.settings import settings
from app.dao import UserDAO
from app.database import SessionLocal, init_db
from app.routers import auth, dashboard, project, task, user
from app.utils.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Manager API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(project.router, prefix="/projects", tags=["Projects"])
app.include_router(task.router, prefix="/tasks", tags=["Tasks"])
app.include_router(user.router, prefix="/users", tags=["Users"])

# Startup events
@app.on_event("startup")
def startup_event():
    """Create missing tables and the default administrator"""
    logger.info("Starting Task Manager API...")
    init_db()
    db = SessionLocal()
    try:
        UserDAO(db).create_default_admin()
    finally:
        db.close()

# Root route
@app.get("/")
def read_root():
    return {"message": "Task Manager API"}

@app.get("/health")
def health():
    return {"status": "ok"}
