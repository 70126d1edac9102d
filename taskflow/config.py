import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

APP_ENV = os.getenv("APP_ENV", "production")
APP_TITLE = os.getenv("APP_TITLE", "TaskFlow")

# Seconds between tick driver passes
TIMER_TICK_INTERVAL_SECONDS = float(os.getenv("TIMER_TICK_INTERVAL_SECONDS", "1.0"))

# Supabase (read lazily by the client singleton)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]


def is_development() -> bool:
    return APP_ENV == "development"
