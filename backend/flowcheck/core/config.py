from pathlib import Path
from typing import List
from dotenv import load_dotenv

# .env อยู่ที่ backend/.env
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

import os
from pydantic import BaseModel


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    FLOWCHECK_LOG_LEVEL: str = os.getenv("FLOWCHECK_LOG_LEVEL", "INFO")
    FLOWCHECK_MAX_RULES: int = int(os.getenv("FLOWCHECK_MAX_RULES", "1000"))
    FLOWCHECK_API_PREFIX: str = os.getenv("FLOWCHECK_API_PREFIX", "/api/v1/nbi")
    FLOWCHECK_CORS_ORIGINS: List[str] = _split_csv(
        os.getenv("FLOWCHECK_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    )

settings = Settings()
