from .settings import AuthSettings, get_auth_settings
from .token import Token

__all__ = ["AuthSettings", "get_auth_settings", "Token"]
