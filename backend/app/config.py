import logging
import logging.handlers
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_database: str = "applytrack"
    mysql_user: str = "applytrack"
    mysql_password: str = ""
    database_url_override: str = ""

    # Auth
    secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    session_ttl_hours: int = 24
    session_cookie_name: str = "session_id"

    # Action tokens
    verify_email_token_ttl_hours: int = 1
    reset_password_token_ttl_hours: int = 1
    delete_account_token_ttl_hours: int = 24

    # Email
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    from_email: str = ""

    # App
    app_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:5173"
    environment: str = "development"
    enable_scheduler: bool = False

    # Background sweeps
    ghost_after_days: int = 21
    scheduler_timezone: str = "UTC"

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""
    log_max_bytes: int = 10_485_760  # 10 MB
    log_backup_count: int = 5

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Ensure secret_key is set properly in non-development environments."""
        weak_keys = {"change-me-in-production", "", "secret", "changeme"}
        if self.environment != "development" and self.secret_key in weak_keys:
            raise ValueError(
                f"SECRET_KEY must be set to a secure value in {self.environment} environment. "
                "Generate one with: openssl rand -hex 32"
            )
        return self

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"mysql+pymysql://{self.mysql_user}:{self.mysql_password}"
            f"@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"
            f"?charset=utf8mb4"
        )

    @property
    def scheduler_enabled(self) -> bool:
        return self.environment == "production" or self.enable_scheduler

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging() -> None:
    """Configure application-wide logging.

    Always logs to the console. When LOG_DIR is set, also writes a detailed
    rotating app.log and an errors-only error.log there.
    """
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))
    root.addHandler(console)

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        detail_fmt = logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        app_handler = logging.handlers.RotatingFileHandler(
            log_dir / "app.log",
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        app_handler.setLevel(logging.DEBUG)
        app_handler.setFormatter(detail_fmt)
        root.addHandler(app_handler)

        err_handler = logging.handlers.RotatingFileHandler(
            log_dir / "error.log",
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        err_handler.setLevel(logging.ERROR)
        err_handler.setFormatter(detail_fmt)
        root.addHandler(err_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
