# backend/app/config.py
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./researchpad.db"  # Default if not in .env

    # Storage Paths
    DATA_PATH: Path = Path("data")
    PROJECTS_PATH: Path | None = None  # Will be set based on DATA_PATH
    LOGS_PATH: Path | None = None  # Will be set based on DATA_PATH

    # Upper bound for the numeric suffix tried when a project directory name is taken
    MAX_DIRECTORY_SUFFIX: int = 10000

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.DATA_PATH, str):
            self.DATA_PATH = Path(self.DATA_PATH)

        # Set derived paths if not explicitly provided
        self.PROJECTS_PATH = Path(self.PROJECTS_PATH) if self.PROJECTS_PATH else self.DATA_PATH / "projects"
        self.LOGS_PATH = Path(self.LOGS_PATH) if self.LOGS_PATH else self.DATA_PATH / "logs"

        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.DATA_PATH, self.PROJECTS_PATH, self.LOGS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

settings = Settings()
