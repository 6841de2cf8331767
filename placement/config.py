import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_DATA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "sample_placements.json")


class Settings(BaseModel):
    data_path: str = DEFAULT_DATA_PATH
    log_level: str = "INFO"
    top_recruiters: int = 15


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        data_path=os.getenv("PLACEMENT_DATA_PATH") or DEFAULT_DATA_PATH,
        log_level=os.getenv("PLACEMENT_LOG_LEVEL", "INFO").upper(),
        top_recruiters=int(os.getenv("PLACEMENT_TOP_RECRUITERS", "15")),
    )


def configure_logging(level: str = None):
    logging.basicConfig(
        level=level or get_settings().log_level,
        format='%(levelname)s - %(message)s'
    )
