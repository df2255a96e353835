"""
Configuration loader from environment variables and .env files.
"""

from typing import Optional

from pydantic import ValidationError

from ..config import ClientConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from .secrets import mask_secret
from .validator import BeeperSettings


def load_from_env(env_file: Optional[str] = None, **overrides) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (BEEPER_ACCESS_TOKEN, BEEPER_DESKTOP_*)
    3. .env file (only when ``env_file`` is given)
    4. Defaults

    Args:
        env_file: Path to a .env file
        **overrides: Any ClientConfig field

    Returns:
        ClientConfig instance

    Raises:
        ConfigurationError: invalid values or no access token

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.local", max_retries=0)
    """
    try:
        settings = BeeperSettings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"invalid environment configuration: {e}") from e

    logging_config = overrides.pop('logging', None)
    if logging_config is None and settings.logging_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level or "INFO",
            format=settings.log_format,
            file_path=settings.log_file_path,
        )

    values = {
        'access_token': settings.access_token or "",
        'base_url': settings.base_url,
        'timeout': settings.timeout,
        'max_retries': settings.max_retries,
        'retry_backoff': settings.retry_backoff,
        'logging': logging_config,
    }
    values.update(overrides)

    return ClientConfig(**values)


def print_config_summary(config: ClientConfig) -> None:
    """
    Print configuration summary with the token masked.

    Example:
        >>> print_config_summary(load_from_env())
        ClientConfig:
          base_url: http://localhost:23373/
          access_token: bdt_***cdef
          ...
    """
    print("ClientConfig:")
    print(f"  base_url: {config.base_url}")
    print(f"  access_token: {mask_secret(config.access_token)}")
    print(f"  timeout: {config.timeout}s")
    print(f"  retry: max_retries={config.max_retries}, backoff={config.retry_backoff}s")
    print(f"  user_agent: {config.user_agent}")

    if config.logging:
        print(f"  logging: level={config.logging.level.value}, format={config.logging.format.value}")
        if config.logging.enable_file:
            print(f"    file: {config.logging.file_path}")
