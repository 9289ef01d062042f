import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

BACKEND_DIR = Path(__file__).resolve().parent.parent
DEFAULT_STORAGE_FILE = BACKEND_DIR / "data" / "inventory.json"


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    def __init__(
        self,
        storage_file: Optional[os.PathLike] = None,
        log_level: Optional[str] = None,
        cors_allow_origins: Optional[List[str]] = None,
    ):
        self.storage_file: Path = Path(
            storage_file or os.getenv("INVENTORY_STORAGE_FILE", str(DEFAULT_STORAGE_FILE))
        )
        self.log_level: str = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
        self.cors_allow_origins: List[str] = (
            cors_allow_origins
            if cors_allow_origins is not None
            else _split_csv(os.getenv("CORS_ALLOW_ORIGINS", "*"))
        )
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "8000"))


settings = Settings()
