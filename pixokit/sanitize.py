"""Filename sanitising and location parsing for stored blobs."""

from __future__ import annotations

import random

_FILENAME_OVERRIDE = "blob"


def _format_filename(filename: str, timestamp: int) -> str:
    if timestamp == 0:
        return filename
    return f"{filename}_{timestamp}"


def sanitize_filename(original_filename: str, timestamp: int) -> str:
    """Replace the file's name with ``blob`` (plus timestamp), keeping its directory and extension."""
    if not original_filename:
        original_filename = f"unnamed_file_{random.randrange(100000)}"

    if original_filename.endswith("/"):
        original_filename += _FILENAME_OVERRIDE

    original_filename = original_filename.replace(" ", "_")
    name_parts = original_filename.split(".")

    if len(name_parts) < 2:
        return _format_filename(original_filename, timestamp)

    *directories, _ = name_parts[0].split("/")
    filename = "/".join([*directories, _FILENAME_OVERRIDE])
    extension = name_parts[-1]
    return f"{_format_filename(filename, timestamp)}.{extension}"


def parse_file_location_from_link(link: str) -> str:
    """Return the path inside the bucket from an https link; other input is returned unchanged."""
    if "https://" not in link:
        return link
    after_scheme = link.split("https://")[1]
    return "/".join(after_scheme.split("/")[1:])


def get_filename_from_location(location: str) -> str:
    """Return the last path part of ``location``."""
    return location.split("/")[-1]