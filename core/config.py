from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    """
    Application settings.
    """
    # API Config
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Form Coach"

    # Logging Config
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # Session Config
    MAX_ACTIVE_SESSIONS: int = 100
    MAX_FEEDBACK_ITEMS: int = 5  # distinct messages kept on a session record
    INCLUDE_JOINT_ANGLES: bool = False
    MAX_STORED_WORKOUTS: int = 500  # completed sessions kept in memory

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

# Create global settings object
settings = Settings()
