from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./boletin.db"
    DB_HOST: str | None = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_DATABASE: str = "boletin_db"
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 30
    SECRET_KEY: str = Field(
        default="dev-secret-boletin",
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRETO"),
    )
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_MINUTES: int = 60
    LOG_LEVEL: str = "INFO"
    LOGIN_RATE_LIMIT: str = "10/minute"
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        # DB_* variables take precedence, same names the MySQL deployment uses
        if self.DB_HOST:
            return (
                f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}/{self.DB_DATABASE}?charset=utf8mb4"
            )
        return self.DATABASE_URL


settings = Settings()
