from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATA_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 1_073_741_824  # 1 GB
    UPLOAD_CHUNK_SIZE: int = 1_048_576
    CORS_ORIGINS: list[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
