"""Alert and named-query configuration."""

from .loader import AlertsConfigLoader, load_alerts, load_named_queries
from .models import Alert, ConfigError, NamedQuery, User

__all__ = [
    "Alert",
    "AlertsConfigLoader",
    "ConfigError",
    "NamedQuery",
    "User",
    "load_alerts",
    "load_named_queries",
]
