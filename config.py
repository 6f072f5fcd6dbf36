"""
Configuration — loads from .env, provides defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# OpenWeatherMap
OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.getenv("OPENWEATHER_BASE_URL", "https://api.openweathermap.org").rstrip("/")
GEO_URL = f"{OPENWEATHER_BASE_URL}/geo/1.0/direct"
WEATHER_URL = f"{OPENWEATHER_BASE_URL}/data/2.5/weather"
FORECAST_URL = f"{OPENWEATHER_BASE_URL}/data/2.5/forecast"
UNITS = os.getenv("OPENWEATHER_UNITS", "metric")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))  # seconds

# Forecast
FORECAST_DAYS = int(os.getenv("FORECAST_DAYS", "5"))
DAILY_SAMPLE_TIME = os.getenv("DAILY_SAMPLE_TIME", "12:00:00")
DATE_LOCALE = os.getenv("DATE_LOCALE", "en_US")

# Telegram (optional, only needed by bot.py)
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
OWNER_CHAT_ID = int(os.getenv("OWNER_CHAT_ID", "0"))

# Dashboard
DASHBOARD_HOST = os.getenv("DASHBOARD_HOST", "127.0.0.1")
DASHBOARD_PORT = int(os.getenv("DASHBOARD_PORT", "8080"))
DASHBOARD_SECRET = os.getenv("DASHBOARD_SECRET", "change-me-in-production")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
