"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Live stream cadence in milliseconds (user-adjustable at runtime)
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "2000"))
    MIN_INTERVAL_MS: int = int(os.getenv("MIN_INTERVAL_MS", "1000"))
    MAX_INTERVAL_MS: int = int(os.getenv("MAX_INTERVAL_MS", "10000"))
    AUTOSTART_STREAM: bool = os.getenv("AUTOSTART_STREAM", "true").lower() == "true"

    # Simulation (-1 → unseeded generator)
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))

    # Alerts
    ALERT_LOG_CAPACITY: int = int(os.getenv("ALERT_LOG_CAPACITY", "50"))
    SOUND_ENABLED: bool = os.getenv("SOUND_ENABLED", "false").lower() == "true"

    # Chart buffers
    TEMPERATURE_HISTORY_POINTS: int = int(os.getenv("TEMPERATURE_HISTORY_POINTS", "20"))
    STREAM_SAMPLE_POINTS: int = int(os.getenv("STREAM_SAMPLE_POINTS", "30"))


settings = Settings()
