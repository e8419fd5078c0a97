from .core.env import (
    CURRENT_ENVIRONMENT,
    IS_DEV,
    IS_LOCAL,
    IS_PROD,
    IS_TEST,
    Env,
    get_env,
)
from .core.logging import setup_logging
from .settings import AppSettings, get_app_settings

__all__ = [
    "CURRENT_ENVIRONMENT",
    "IS_DEV",
    "IS_LOCAL",
    "IS_PROD",
    "IS_TEST",
    "Env",
    "get_env",
    "setup_logging",
    "AppSettings",
    "get_app_settings",
]
