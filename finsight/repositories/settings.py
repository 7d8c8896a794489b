from decimal import Decimal
from typing import List, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DOMAIN: str = "localhost"
    LOG_LEVEL: str = "INFO"

    # database
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "finsight"
    POSTGRES_PASSWORD: str = "finsight"
    POSTGRES_DB: str = "finsight"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # for jwt
    SECRET_KEY: str = "xxxxxxxxxxxxxxxxxxxxxxxxxxxxx"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # bearer secret for the scheduled recurring-expense job, unset disables the check
    CRON_SECRET: Optional[str] = None

    # smallest amount the savings distribution hands out
    CURRENCY_UNIT: Decimal = Decimal("0.01")


settings = Settings()  # type: ignore
