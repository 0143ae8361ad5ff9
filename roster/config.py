from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Student Roster"
    debug: bool = False

    # Remote student API settings
    roster_api_base: str = "https://rest-backend-prosevo.onrender.com"
    request_timeout: float = 30.0

    # Application settings
    log_dir: str = "logs"
    success_toast_seconds: float = 2.0
    error_toast_seconds: float = 4.0
    refresh_on_startup: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
