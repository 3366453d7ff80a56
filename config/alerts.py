"""
config/alerts.py
────────────────
Alert severity levels, trigger thresholds and display configuration.
"""

from enum import Enum


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


SEVERITY_COLORS: dict[str, str] = {
    AlertSeverity.INFO.value: "#58a6ff",
    AlertSeverity.WARNING.value: "#e8a020",
    AlertSeverity.CRITICAL.value: "#da3633",
}

SEVERITY_LABELS: dict[str, str] = {
    AlertSeverity.INFO.value: "Info",
    AlertSeverity.WARNING.value: "Warning",
    AlertSeverity.CRITICAL.value: "Critical",
}

# Risk category display
CATEGORY_COLORS: dict[str, str] = {
    "Low": "#1FB8CD",
    "Medium": "#FFC185",
    "High": "#B4413C",
}

# ── Alert trigger (any one is enough, in addition to a High category) ─────────
ALERT_TEMPERATURE_C = 38.0
ALERT_VIBRATION = 0.8
ALERT_ERROR_LOGS = 20

CRITICAL_ALERT_TITLE = "CRITICAL DEVICE ALERT"
CRITICAL_ALERT_MESSAGE = "{name} requires immediate inspection"
