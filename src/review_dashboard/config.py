"""
Dashboard settings: Mongo connection, the request header carrying the
signed-in user id, and the log level. Values come from the
`REVIEW_DASHBOARD_*` and `LOG_LEVEL` environment variables, with a `.env` file in the working directory loaded
first. Without a Mongo URI the app runs on the in-memory document store.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    MONGO_URI: Optional[str] = None
    MONGO_DB: str = "review_dashboard"
    USER_HEADER: str = "X-User-Id"
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            MONGO_URI=os.getenv("REVIEW_DASHBOARD_MONGO_URI") or None,
            MONGO_DB=os.getenv("REVIEW_DASHBOARD_MONGO_DB", "review_dashboard"),
            USER_HEADER=os.getenv("REVIEW_DASHBOARD_USER_HEADER", "X-User-Id"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
