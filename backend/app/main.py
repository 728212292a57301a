# backend/app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.auth import router as auth_router
from backend.app.api.tasks import router as tasks_router
from backend.app.deps import get_settings
from inbox_tasks.config.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level, logs_dir=settings.logs_dir)

app = FastAPI(title="inbox-tasks API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(auth_router, prefix="/api")
app.include_router(tasks_router, prefix="/api")


@app.get("/health")
def health() -> dict:
    return {"status": "healthy"}
