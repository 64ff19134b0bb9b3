"""Infrastructure layer — external system integration.

This layer wraps all interaction with ``requests`` and the filesystem
configuration sources.  Raw third-party exceptions are caught here and
either reported as data (:class:`~thumby.core.models.HttpResult`) or
re-raised as a :class:`~thumby.exceptions.ThumbyError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from thumby.infra.config_loader import ConfigSource, LoadedConfig, load_config
from thumby.infra.http_client import RequestsHttpClient

__all__: list[str] = [
    "ConfigSource",
    "LoadedConfig",
    "RequestsHttpClient",
    "load_config",
]
