from __future__ import annotations

from pydantic import BaseModel

from inbox_tasks.models import Task


class TaskResponse(BaseModel):
    eventType: str
    subject: str
    deadline: str
    urgency: str
    importance: str
    score: str
    priority: str
    registrationLink: str
    summary: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(**task.to_dict())


class AuthUrlResponse(BaseModel):
    ok: bool = True
    auth_url: str
    session_id: str
