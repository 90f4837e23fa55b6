from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Find .env next to the project or in the runtime cwd
POSSIBLE_ENV_PATHS = [
    Path(__file__).resolve().parent.parent / ".env",
    Path.cwd() / ".env",
]

for env_path in POSSIBLE_ENV_PATHS:
    if env_path.exists():
        load_dotenv(env_path, override=False)
        break


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./expenses.db"

    # JWT
    SECRET_KEY: str = "supersecretkey_change_this"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Dashboard month boundary
    TIMEZONE: str = "UTC"

    # Logging
    LOG_FILE: Optional[str] = "app.log"
    LOG_LEVEL: str = "DEBUG"

    SEED_DEFAULT_CATEGORIES: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
