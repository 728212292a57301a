# backend/app/api/tasks.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from backend.app.deps import get_generator, get_session_store, get_settings
from backend.app.schemas import TaskResponse
from inbox_tasks.app.run import collect_tasks
from inbox_tasks.config.settings import Settings
from inbox_tasks.llm.client import TextGenerator
from inbox_tasks.storage.sessions import DEFAULT_SESSION_ID, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tasks", response_model=List[TaskResponse])
async def list_tasks(
    session_id: str = DEFAULT_SESSION_ID,
    store: SessionStore = Depends(get_session_store),
    generator: TextGenerator = Depends(get_generator),
    settings: Settings = Depends(get_settings),
) -> List[TaskResponse]:
    credentials = store.get(session_id)
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        # Gmail and model calls block, keep them off the event loop.
        tasks = await run_in_threadpool(collect_tasks, credentials, generator, settings)
    except Exception as exc:
        logger.exception("Error fetching tasks for session %s", session_id)
        raise HTTPException(status_code=500, detail="Failed to fetch tasks") from exc

    return [TaskResponse.from_task(task) for task in tasks]
