"""Chart descriptions, client settings and a recording chart client for tests."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class Chart:
    """A chart in a repository and the release it is installed as."""

    name: str = ""
    repo_url: str = ""
    version: str = ""
    release_name: str = ""
    namespace: str = ""


@dataclass(frozen=True)
class ClientConfig:
    """Settings of a chart client."""

    namespace: str = ""
    driver: str = ""
    charts_directory: str = ""


def resolve_client_config(config: ClientConfig) -> ClientConfig:
    """Fill an empty namespace from NAMESPACE and an empty driver from HELM_DRIVER."""
    namespace = config.namespace or os.environ.get("NAMESPACE", "")
    driver = config.driver or os.environ.get("HELM_DRIVER", "")
    return dataclasses.replace(config, namespace=namespace, driver=driver)


@runtime_checkable
class HelmClient(Protocol):
    """Operations on chart releases."""

    def namespace(self) -> str:
        ...

    def install(self, chart: Chart, values: dict[str, Any]) -> None:
        ...

    def upgrade(self, chart: Chart, values: dict[str, Any]) -> None:
        ...

    def exists(self, chart: Chart) -> bool:
        ...

    def uninstall(self, chart: Chart) -> None:
        ...

    def download_chart(self, chart_url: str) -> str:
        ...

    def load_chart(self, chart: Chart) -> Any:
        ...


@dataclass
class MockHelmClient:
    """A chart client that records every call and can be told to fail."""

    namespace_returns: str = ""

    called_install_chart_with: list[tuple[Chart, dict[str, Any]]] = field(default_factory=list)
    install_error: Exception | None = None

    called_upgrade_chart_with: list[tuple[Chart, dict[str, Any]]] = field(default_factory=list)
    upgrade_error: Exception | None = None

    called_exists_with: list[Chart] = field(default_factory=list)
    exists_returns: bool = False
    exists_error: Exception | None = None

    called_download_chart_with: list[str] = field(default_factory=list)
    download_returns: str = ""
    download_error: Exception | None = None

    called_load_chart_with: list[Chart] = field(default_factory=list)
    load_chart_returns: Any = None
    load_error: Exception | None = None

    called_uninstall_chart_with: list[Chart] = field(default_factory=list)
    uninstall_error: Exception | None = None

    def namespace(self) -> str:
        return self.namespace_returns

    def install(self, chart: Chart, values: dict[str, Any]) -> None:
        self.called_install_chart_with.append((chart, values))
        if self.install_error is not None:
            raise self.install_error

    def upgrade(self, chart: Chart, values: dict[str, Any]) -> None:
        self.called_upgrade_chart_with.append((chart, values))
        if self.upgrade_error is not None:
            raise self.upgrade_error

    def exists(self, chart: Chart) -> bool:
        self.called_exists_with.append(chart)
        if self.exists_error is not None:
            raise self.exists_error
        return self.exists_returns

    def uninstall(self, chart: Chart) -> None:
        self.called_uninstall_chart_with.append(chart)
        if self.uninstall_error is not None:
            raise self.uninstall_error

    def download_chart(self, chart_url: str) -> str:
        self.called_download_chart_with.append(chart_url)
        if self.download_error is not None:
            raise self.download_error
        return self.download_returns

    def load_chart(self, chart: Chart) -> Any:
        self.called_load_chart_with.append(chart)
        if self.load_error is not None:
            raise self.load_error
        return self.load_chart_returns