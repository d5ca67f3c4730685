"""
JsonBank client configuration helpers.
"""

import logging
import os
from typing import Mapping, Optional

from jsonbank.clients.cloud import JsonBank
from jsonbank.models import InitConfig, Keys

# Environment variables read by load_client_from_env
HOST_ENV = "JSB_HOST"
PUBLIC_KEY_ENV = "JSB_PUBLIC_KEY"
PRIVATE_KEY_ENV = "JSB_PRIVATE_KEY"

logger = logging.getLogger(__name__)


def _env_value(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name, "").strip()
    return value or None


def config_from_env(env: Optional[Mapping[str, str]] = None) -> InitConfig:
    """
    Build an InitConfig from environment variables.

    Unset or empty variables are treated as absent, so a missing host falls
    back to the default host and missing keys stay unset.

    Args:
        env: Mapping to read from (default: os.environ)
    """
    if env is None:
        env = os.environ

    public = _env_value(env, PUBLIC_KEY_ENV)
    private = _env_value(env, PRIVATE_KEY_ENV)
    keys = Keys(public=public, private=private) if (public or private) else None
    if keys is None:
        logger.debug("No JsonBank API keys in environment, only public reads will work")

    return InitConfig(host=_env_value(env, HOST_ENV), keys=keys)


def load_client_from_env(env: Optional[Mapping[str, str]] = None, **kwargs) -> JsonBank:
    """Create a client configured from JSB_HOST, JSB_PUBLIC_KEY and JSB_PRIVATE_KEY."""
    return JsonBank(config_from_env(env), **kwargs)
