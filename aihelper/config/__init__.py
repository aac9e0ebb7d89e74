"""Configuration modules for AIHelper."""

from .provider_config import (
    Provider,
    ProviderConfiguration,
    ProviderSettings,
    load_provider_config,
)
from .logging_config import (
    configure_logging,
    get_logger,
)

__all__ = [
    'Provider',
    'ProviderConfiguration',
    'ProviderSettings',
    'load_provider_config',
    'configure_logging',
    'get_logger',
]
