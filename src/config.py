from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = "development"  # development | production | test
    log_level: str = "INFO"
    port: int = 3000

    # Comma-separated list of allowed browser origins
    cors_origins: str = "http://localhost:3000,http://localhost:3001"

    # Catalog database (MySQL)
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "catalog"
    db_password: str = "catalog"
    db_name: str = "catalog"
    database_url: str | None = None
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # Catalog API as seen by the storefront proxy and the terminal browser
    backend_api_url: str = "http://localhost:3000"
    http_timeout_seconds: float = 30.0

    default_page_size: int = 50
    max_page_size: int = 200

    @property
    def async_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"mysql+aiomysql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def database_url_sync(self) -> str:
        """Blocking-driver URL for Alembic."""
        return self.async_database_url.replace("+aiomysql", "+pymysql", 1)

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
