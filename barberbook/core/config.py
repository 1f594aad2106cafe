from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "BarberBook")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Storage: "mongo" or "memory"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "mongo")
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "barberbook_db")

    # JWT Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your_secret_key_here")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # Operator account seeded at startup
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin123")

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite dev server
    ]

    # Background jobs
    SCHEDULER_ENABLED: bool = True
    SWEEP_INTERVAL_SECONDS: int = int(os.getenv("SWEEP_INTERVAL_SECONDS", "30"))
    REMINDER_WINDOW_MINUTES: int = int(os.getenv("REMINDER_WINDOW_MINUTES", "30"))

    # Calendar
    BOOKING_WINDOW_DAYS: int = int(os.getenv("BOOKING_WINDOW_DAYS", "7"))
    WEEKEND_DAYS: List[int] = [5, 6]  # datetime.weekday(): Saturday, Sunday
    # YYYY-MM-DD dates; set from the environment as a JSON list,
    # e.g. HOLIDAYS='["2025-12-25", "2026-01-01"]'
    HOLIDAYS: List[str] = []

    # Business settings used until an operator saves their own
    DEFAULT_OPENING_TIME: str = os.getenv("DEFAULT_OPENING_TIME", "08:00")
    DEFAULT_CLOSING_TIME: str = os.getenv("DEFAULT_CLOSING_TIME", "17:00")
    DEFAULT_SLOT_DURATION_MINUTES: int = int(os.getenv("DEFAULT_SLOT_DURATION_MINUTES", "45"))
    DEFAULT_MAX_SLOTS_PER_PROVIDER_PER_DAY: int = int(os.getenv("DEFAULT_MAX_SLOTS_PER_PROVIDER_PER_DAY", "10"))

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
