"""Infrastructure configuration module.

The DI container is imported from ``di_container`` directly.
"""

from nft_monitor.infrastructure.config.settings import Settings

__all__ = ["Settings"]
