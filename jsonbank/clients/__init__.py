"""
JsonBank transport backends.

Provides the cloud (HTTP API) client implementation.
"""

from jsonbank.clients.cloud import (  # noqa: F401
    JsonBank,
    make_endpoints,
)
