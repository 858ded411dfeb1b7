from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    token_file: Path = Path("token.json")
    client_secret_file: Path = Path("credentials.json")
    log_level: str = "WARNING"
    default_list_name: str = "Default List"
    tasklists_page_size: int = 10
    tasks_page_size: int = 100
    # Use a loopback redirect server instead of pasting the code on stdin
    oauth_local_server: bool = False

    model_config = {"env_prefix": "GTASKS_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
