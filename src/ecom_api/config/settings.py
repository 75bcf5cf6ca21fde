"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

import sqlalchemy as sa
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PortInt = Annotated[int, Field(gt=0, le=65_535)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    public_host: NonEmptyStr = Field(default="http://localhost", validation_alias="PUBLIC_HOST")
    port: PortInt = Field(default=8080, validation_alias="PORT")
    db_user: NonEmptyStr = Field(default="root", validation_alias="DB_USER")
    db_password: str = Field(default="mypassword", validation_alias="DB_PASSWORD")
    db_host: NonEmptyStr = Field(default="127.0.0.1", validation_alias="DB_HOST")
    db_port: PortInt = Field(default=3306, validation_alias="DB_PORT")
    db_name: NonEmptyStr = Field(default="ecom", validation_alias="DB_NAME")
    db_driver: NonEmptyStr = Field(default="mysql+aiomysql", validation_alias="DB_DRIVER")
    database_url_override: NonEmptyStr | None = Field(
        default=None,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def db_address(self) -> str:
        """Return the `host:port` pair of the database server."""

        return f"{self.db_host}:{self.db_port}"

    @property
    def database_url(self) -> str:
        """Return the SQLAlchemy URL, preferring an explicit DATABASE_URL."""

        if self.database_url_override is not None:
            return self.database_url_override
        url = sa.URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
