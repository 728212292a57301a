# backend/app/deps.py
from __future__ import annotations

from functools import lru_cache

from inbox_tasks.config.settings import Settings, load_settings
from inbox_tasks.llm.client import OpenAIGenerator, TextGenerator
from inbox_tasks.storage.sessions import InMemorySessionStore, SessionStore


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    # One process-wide store; swap via dependency_overrides in tests.
    return InMemorySessionStore()


def get_generator() -> TextGenerator:
    return OpenAIGenerator.from_settings(get_settings())
