from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure env file is loaded before Settings() reads environment variables
from app.core.env import load_env
load_env()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=None,  # loaded via app.core.env (ENV_FILE)
        extra="ignore",
        case_sensitive=True,
    )

    DATABASE_URL: str
    LOG_LEVEL: str = "INFO"

    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Media storage
    USE_LOCAL_STORAGE: bool = True  # local filesystem instead of S3 (for dev)
    MEDIA_STORAGE_PATH: str = "./storage/media"
    MEDIA_BASE_URL: str = "/media"
    MEDIA_FOLDER: str = "akademi"
    MAX_UPLOAD_SIZE_MB: int = 100
    AWS_ACCESS_KEY_ID: str = "dummy-key-id"
    AWS_SECRET_ACCESS_KEY: str = "dummy-secret-key"
    AWS_S3_BUCKET: str = "catalog-dev"
    AWS_REGION: str = "us-east-1"


settings = Settings()
