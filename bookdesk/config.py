import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SEED_DIR = Path(__file__).resolve().parent / "data"


def _flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Seed data
    seed_dir: str = os.getenv("BOOKDESK_SEED_DIR", str(DEFAULT_SEED_DIR))

    # Request defaults
    default_loan_days: int = int(os.getenv("BOOKDESK_DEFAULT_LOAN_DAYS", "14"))

    # Lifecycle hardening (both off = historical behavior)
    strict_transitions: bool = _flag("BOOKDESK_STRICT_TRANSITIONS")
    clamp_returned_copies: bool = _flag("BOOKDESK_CLAMP_RETURNED_COPIES")

    log_level: str = os.getenv("BOOKDESK_LOG_LEVEL", "INFO")


settings = Settings()
