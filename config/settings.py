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

    # Dashboard refresh interval in milliseconds
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "5000"))

    # Simulation
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    TICK_INTERVAL_S: float = float(os.getenv("TICK_INTERVAL_S", "5.0"))
    DRIFT_MODE: str = os.getenv("DRIFT_MODE", "relative")
    QUALITY_CHANGE_PROBABILITY: float = float(os.getenv("QUALITY_CHANGE_PROBABILITY", "0.05"))

    # Monitoring thresholds (fractions in [0, 1])
    CRITICAL_LEVEL_THRESHOLD: float = float(os.getenv("CRITICAL_LEVEL_THRESHOLD", "0.2"))
    CONTAMINATION_THRESHOLD: float = float(os.getenv("CONTAMINATION_THRESHOLD", "0.8"))

    # Reports
    REPORT_DIR: str = os.getenv("REPORT_DIR", "reports")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Alerts
    MAX_ALERTS_KEPT: int = int(os.getenv("MAX_ALERTS_KEPT", "200"))


settings = Settings()
