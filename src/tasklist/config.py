from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = []
    session_ttl_seconds: int = 300  # Absolute lifetime of a session, counted from login
    single_session: bool = False  # Revoke a user's older sessions on each new login
    session_cookie_name: str = "session_id"
    cookie_secure: bool = False  # Set to True in production with HTTPS
    allocation_retries: int = 1  # Extra attempts when a new task id collides with a concurrent insert

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKLIST_",
        "extra": "ignore",
    }
