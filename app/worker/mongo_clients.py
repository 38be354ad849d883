"""Sync PyMongo client for the worker (the API process uses Motor)."""

from __future__ import annotations

from functools import lru_cache

from pymongo import MongoClient

from app.core.config import get_settings


@lru_cache
def get_pymongo_db():
    settings = get_settings()
    client = MongoClient((settings.MONGO_URI or "").strip(), tz_aware=True)
    return client[settings.MONGO_DB_NAME]
