"""
Runtime configuration loaded from the environment (.env supported)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Settings shared by the service, the components and the admin CLI."""

    database_url: str = "sqlite:///./agridirect.db"
    base_url: str = "http://localhost:5000"
    upload_dir: Path = Path("uploads")
    qr_code_dir: Optional[Path] = None  # defaults to <upload_dir>/qrcodes
    bcrypt_rounds: int = 10
    require_verified_farmer: bool = True
    admin_api_key: str = ""
    log_level: str = "INFO"
    port: int = 5000

    def __post_init__(self):
        self.upload_dir = Path(self.upload_dir)
        if self.qr_code_dir is None:
            self.qr_code_dir = self.upload_dir / "qrcodes"
        else:
            self.qr_code_dir = Path(self.qr_code_dir)
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        upload_dir = os.getenv("UPLOAD_DIR", "uploads")
        qr_code_dir = os.getenv("QR_CODE_DIR") or None
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./agridirect.db"),
            base_url=os.getenv("BASE_URL", "http://localhost:5000"),
            upload_dir=Path(upload_dir),
            qr_code_dir=Path(qr_code_dir) if qr_code_dir else None,
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
            require_verified_farmer=_env_bool("REQUIRE_VERIFIED_FARMER", True),
            admin_api_key=os.getenv("ADMIN_API_KEY", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            port=int(os.getenv("PORT", "5000")),
        )
