"""Locating the kubeconfig file used for local cluster access."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

_DEFAULT_HOME = "/workspace"


def kubeconfig_path() -> str:
    """Return KUBECONFIG, or ``.kube/config`` under HOME (``/workspace`` when HOME is unset)."""
    config_path = os.environ.get("KUBECONFIG")
    if config_path is None:
        home = os.environ.get("HOME", _DEFAULT_HOME)
        config_path = os.path.join(home, ".kube", "config")
    logger.debug("Using KUBECONFIG for K8s config: %s", config_path)
    return config_path