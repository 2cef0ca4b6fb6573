# ABOUTME: Main configuration composition for the library.
# ABOUTME: Assembles all configuration classes into a single, accessible object.

from functools import lru_cache

from ._base import BaseCoreSettings, MiddlewareSettings


class CoreSettings(BaseCoreSettings, MiddlewareSettings):
    """Represents the complete, composed configuration for the library.

    Each settings module stays self-contained and the final class inherits
    from all of them, so the rest of the code reads a single object.

    The `get_settings` function provides a singleton instance of this class.
    """

    pass


@lru_cache
def get_settings() -> CoreSettings:
    """Provides a singleton instance of the library settings.

    Environment variables and the `.env` file are read once; later calls
    return the cached instance. Call `get_settings.cache_clear()` to reload.

    Returns:
        A single, cached instance of the CoreSettings class.
    """
    return CoreSettings()
