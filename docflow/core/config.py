from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Remote document/workflow backend
    API_BASE_URL: str = "http://localhost:5000"
    API_TIMEOUT_SECONDS: float = 30.0
    UPLOAD_TIMEOUT_SECONDS: float = 60.0  # file uploads get a longer budget

    # Session persistence
    TOKEN_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 30  # 30 days
    STORE_URL: str = "sqlite:///./docflow_store.db"

    # Entry points
    LOGIN_PATH: str = "/login"
    HOME_PATH: str = "/"

    # Portal
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # User management rules
    PASSWORD_MIN_LENGTH: int = 6

    # --- REPORT EXPORT ---
    REPORT_TITLE: str = "Enterprise Management System"
    WKHTMLTOPDF_PATH: str | None = None  # falls back to PATH lookup

    ENV: str = "dev"  # "dev" or "prod"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
