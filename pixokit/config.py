"""Environment configuration and request-context helpers."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class MissingEnvironmentVariableError(LookupError):
    """Raised when a required environment variable is not set."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing required environment variable: {key}")


@dataclass
class User:
    """The authenticated user attached to a request."""

    id: int = 0


class ContextRequest(str, Enum):
    """Keys under which request-scoped values are stored."""

    GIN = "GIN_CONTEXT"
    AUTHORIZATION = "ENFORCER_CONTEXT"
    AUTHENTICATION = "USER_CONTEXT"
    HOST = "IP_ADDRESS_CONTEXT"
    CUSTOM = "CUSTOM_CONTEXT"

    def __str__(self) -> str:
        return self.value


def get_project_root(*differential: str) -> str:
    """Return the package directory joined with the first argument, or "" without one."""
    if not differential:
        return ""
    return os.path.normpath(os.path.join(_PACKAGE_DIR, differential[0]))


def load_env_vars(*differential: str) -> None:
    """Load a ``.env`` file from the project root; existing variables are kept."""
    env_path = os.path.join(get_project_root(*differential), ".env")
    load_dotenv(env_path)


def get_env_or_return(key: str, fallback: str) -> str:
    """Return the environment variable ``key`` or ``fallback`` when it is unset."""
    return os.environ.get(key, fallback)


def get_env_or_crash(key: str) -> str:
    """Return the environment variable ``key`` or raise when it is unset."""
    try:
        return os.environ[key]
    except KeyError:
        logger.critical("Missing required environment variable: %s", key)
        raise MissingEnvironmentVariableError(key) from None


def get_lifecycle() -> str:
    """Return the lower-cased deployment lifecycle, ``local`` by default."""
    return get_env_or_return("LIFECYCLE", "local").lower()


def get_domain() -> str:
    """Return the configured domain, ``localhost`` by default."""
    return get_env_or_return("DOMAIN", "localhost")


def get_region() -> str:
    """Return ``saudi`` for Middle East regions and ``us-central1`` otherwise."""
    region = get_env_or_return("REGION", "us-central1").lower()
    if "me-central" in region or "saudi" in region:
        return "saudi"
    return "us-central1"


def get_request_context(ctx: Mapping[Any, Any]) -> Any:
    """Return the web-framework request context stored in ``ctx``, if any."""
    return ctx.get(ContextRequest.GIN)


def get_ip_address(ctx: Mapping[Any, Any]) -> str:
    """Return the client IP address stored in ``ctx``, or an empty string."""
    ip_address = ctx.get(str(ContextRequest.HOST))
    return ip_address if isinstance(ip_address, str) else ""


def get_current_user_id(ctx: Mapping[Any, Any]) -> int:
    """Return the authenticated user's id, or 0 when there is none."""
    user = ctx.get(ContextRequest.AUTHENTICATION)
    return user.id if isinstance(user, User) else 0


def get_authorization_enforcer(ctx: Mapping[Any, Any]) -> Any:
    """Return the authorization enforcer stored in ``ctx``, if any."""
    return ctx.get(ContextRequest.AUTHORIZATION)


load_env_vars()