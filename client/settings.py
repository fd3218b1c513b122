from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _float(value: str, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = os.getenv("CLASSBOARD_API_URL", "http://127.0.0.1:5000/api")
    upload_url: str = os.getenv("CLASSBOARD_UPLOAD_URL", "http://127.0.0.1:5000/api/upload")
    max_file_mb: float = _float(os.getenv("CLASSBOARD_MAX_FILE_MB", "5"), 5.0)
    timeout: float = _float(os.getenv("CLASSBOARD_TIMEOUT", "15"), 15.0)


settings = Settings()
