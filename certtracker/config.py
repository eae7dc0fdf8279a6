from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Service
    service_name: str = "certtracker"
    debug: bool = False

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "certtracker"
    db_user: str = "dbadmin"
    db_password: str = ""
    use_in_memory_store: bool = False  # Seeded in-memory adapters for development

    # AWS
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # For LocalStack
    ses_sender_email: str = "noreply@certtracker.local"

    # Notifications
    notification_channel: str = "log"  # email | teams | log
    teams_webhook_url: str | None = None
    frontend_url: str = "http://localhost:3000"

    # Reminders
    reminder_cooldown_days: int = 7
    expiring_soon_window_days: int = 30
    dispatch_timeout_seconds: float = 30.0
    dispatch_concurrency: int = 10
    max_consecutive_persistence_failures: int = 5

    # Scheduler
    embedded_scheduler: bool = False  # Run cron jobs inside the API process
    daily_reminder_cron: str = "0 9 * * *"
    weekly_sweep_cron: str = "0 10 * * 1"
    scheduler_timezone: str = "America/New_York"

    # Authentication
    auth_enabled: bool = False  # Disable in development
    cognito_user_pool_id: str | None = None
    cognito_client_id: str | None = None
    cognito_region: str = "us-east-1"
    admin_group: str = "admins"

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
