from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Settings:
    db_url: str
    currency: str = "Rp"
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        db_url=os.getenv("RECIPE_DB_URL", f"sqlite:///{(DATA_DIR / 'recipes.db').as_posix()}"),
        currency=os.getenv("RECIPE_CURRENCY", "Rp"),
        log_level=os.getenv("RECIPE_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        force=True,
    )
