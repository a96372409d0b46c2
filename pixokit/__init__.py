"""Server utilities: configuration, storage helpers, localization, chart and workflow clients, log streaming."""

__version__ = "0.1.0"