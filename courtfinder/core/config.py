"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Courts Finder"
    debug: bool = True
    api_prefix: str = "/api"

    # Database
    database_url: str = "postgresql+asyncpg://courts:courts@db:5432/courts"
    database_echo: bool = False
    # Small pool: serverless hosts cap concurrent connections per instance
    db_pool_size: int = 2
    db_max_overflow: int = 0

    # TLS to the database (PEM file paths). Any one set enables TLS.
    db_ssl_ca: str | None = None
    db_ssl_cert: str | None = None
    db_ssl_key: str | None = None

    # CORS
    cors_origins: str = "*"

    # Admin
    super_admin_secret: str = ""

    # Image host (ImgBB-compatible)
    image_host_api_key: str = ""
    image_host_upload_url: str = "https://api.imgbb.com/1/upload"
    image_host_timeout_seconds: float = 30.0
    org_icon_max_length: int = 2048

    model_config = {"env_prefix": "CF_", "env_file": ".env", "extra": "ignore"}

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
