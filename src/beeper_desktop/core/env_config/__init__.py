"""
Environment configuration for the Beeper Desktop client.

Example:
    >>> from beeper_desktop.core.env_config import load_from_env
    >>>
    >>> config = load_from_env()                    # BEEPER_ACCESS_TOKEN, ...
    >>> config = load_from_env(env_file=".env")     # plus a .env file
    >>> config = load_from_env(max_retries=0)       # with overrides
"""

from .loader import load_from_env, print_config_summary
from .validator import BeeperSettings
from .secrets import mask_secret

__all__ = [
    "load_from_env",
    "print_config_summary",
    "BeeperSettings",
    "mask_secret",
]
