from functools import lru_cache
from typing import Dict, Optional

from pydantic_settings import BaseSettings

from .tags import merge_tags, routing_tags


class Settings(BaseSettings):
    """Client settings read from ``TELEGRAF_*`` environment variables or ``.env``."""

    ADDRESS: str = "tcp://127.0.0.1:8094"
    DEFAULT_TAGS: Dict[str, str] = {}
    DATABASE: Optional[str] = None

    @property
    def implicit_tags(self) -> Dict[str, str]:
        routing = routing_tags(self.DATABASE) if self.DATABASE else None
        return merge_tags(self.DEFAULT_TAGS, routing)

    class Config:
        env_prefix = "TELEGRAF_"
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
