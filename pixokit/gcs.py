"""Google Cloud Storage client settings, URLs and cache keys."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from pixokit.sanitize import parse_file_location_from_link, sanitize_filename
from pixokit.storage import UploadableObject

DEFAULT_EXPIRE_DURATION = timedelta(minutes=120)
CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

_PUBLIC_URL_BASE = "https://storage.googleapis.com"


@dataclass(frozen=True)
class GcsConfig:
    """Settings of a storage client: the default bucket, a path and an optional cache."""

    bucket_name: str = ""
    path: str = ""
    cache: Any = None


class GcsClient:
    """Builds bucket names, public URLs and cache keys for stored objects."""

    def __init__(self, config: GcsConfig | None = None) -> None:
        config = config or GcsConfig()
        if not config.bucket_name:
            config = dataclasses.replace(config, bucket_name=os.environ.get("GOOGLE_STORAGE_BUCKET", ""))
        self.config = config

    def bucket_name_for(self, obj: UploadableObject) -> str:
        """Return the object's bucket, else the configured one, else GOOGLE_STORAGE_BUCKET."""
        bucket_name = obj.bucket_name_value()
        if bucket_name:
            return bucket_name
        if self.config.bucket_name:
            return self.config.bucket_name
        return os.environ.get("GOOGLE_STORAGE_BUCKET", "")

    def public_url(self, obj: UploadableObject) -> str:
        """Return the public URL of ``obj``, or "" when it has no location."""
        bucket_name = self.bucket_name_for(obj)
        file_location = obj.file_location()
        if not file_location:
            return ""
        return f"{_PUBLIC_URL_BASE}/{bucket_name}/{file_location}"

    def cache_key(self, obj: UploadableObject) -> str:
        """Return the key under which the signed URL of ``obj`` is cached."""
        return f"signed-url:{self.bucket_name_for(obj)}/{obj.file_location()}"

    def sanitize_filename(self, filename: str, timestamp: int) -> str:
        return sanitize_filename(filename, timestamp)


@dataclass(frozen=True)
class DefaultPublicUploadable:
    """An object in the public bucket named by GOOGLE_STORAGE_PUBLIC."""

    path: str

    def bucket_name_value(self) -> str:
        return os.environ.get("GOOGLE_STORAGE_PUBLIC", "")

    def file_location(self) -> str:
        return parse_file_location_from_link(self.path)

    def timestamp_value(self) -> int:
        return 0


def public_uploadable(file_location: str) -> DefaultPublicUploadable:
    """Return an uploadable for ``file_location`` in the public bucket."""
    return DefaultPublicUploadable(path=file_location)