"""Blob storage interfaces and the basic uploadable objects."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, BinaryIO, Protocol, runtime_checkable

from pixokit.errors import error_required


@runtime_checkable
class UploadableObject(Protocol):
    """Something that can be stored in a bucket."""

    def bucket_name_value(self) -> str:
        """Return the bucket name, or "" to use the client's default."""
        ...

    def file_location(self) -> str:
        """Return the object's path inside the bucket."""
        ...

    def timestamp_value(self) -> int:
        """Return the Unix timestamp attached to the object, or 0."""
        ...


@dataclass(frozen=True)
class SignedUrlOption:
    """Options for building a signed URL."""

    content_disposition: str = ""
    lifetime: timedelta = timedelta(0)
    method: str = ""


@dataclass(frozen=True)
class ResumableUploadResponse:
    """Where and how to send the data of a resumable upload."""

    upload_url: str
    method: str
    signed_header: dict[str, list[str]] = field(default_factory=dict)


@runtime_checkable
class StorageClient(Protocol):
    """Operations offered by a blob storage backend."""

    def find_files_with_name(self, bucket_name: str, prefix: str, filename: str) -> list[str]:
        """Return locations under ``prefix`` whose last path part is ``filename``."""
        ...

    def public_url(self, obj: UploadableObject) -> str:
        """Return the public URL of ``obj``."""
        ...

    def signed_url(self, obj: UploadableObject, *options: SignedUrlOption) -> str:
        """Return a signed URL for ``obj``."""
        ...

    def checksum(self, obj: UploadableObject) -> str:
        """Return the checksum of ``obj``."""
        ...

    def file_exists(self, obj: UploadableObject) -> bool:
        """Return whether ``obj`` exists."""
        ...

    def upload_file(self, obj: UploadableObject, reader: BinaryIO) -> str:
        """Upload the data from ``reader`` and return its location."""
        ...

    def copy(self, src: UploadableObject, dest: UploadableObject) -> None:
        """Copy ``src`` to ``dest``."""
        ...

    def read_file(self, obj: UploadableObject) -> BinaryIO:
        """Open ``obj`` for reading; the caller closes it."""
        ...

    def delete_file(self, obj: UploadableObject) -> None:
        """Delete ``obj``."""
        ...

    def init_resumable_upload(self, obj: UploadableObject) -> ResumableUploadResponse | None:
        """Start a resumable upload for ``obj``."""
        ...


@dataclass(frozen=True)
class SignedUrlPartsRequest:
    """A request for signed URLs for the parts of a chunked upload."""

    id: int
    filename: str
    num_chunks: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SignedUrlPartsRequest:
        """Build a request from its JSON form; every field is required and non-empty."""
        for key in ("id", "filename", "numChunks"):
            if not data.get(key):
                raise error_required(key)
        return cls(id=int(data["id"]), filename=str(data["filename"]), num_chunks=int(data["numChunks"]))

    def to_dict(self) -> dict[str, Any]:
        """Return the request in its JSON form."""
        return {"id": self.id, "filename": self.filename, "numChunks": self.num_chunks}


@dataclass(frozen=True)
class BasicUploadable:
    """An object placed at ``upload_destination/filename`` in a bucket."""

    bucket_name: str = ""
    upload_destination: str = ""
    filename: str = ""
    timestamp: int = 0

    def bucket_name_value(self) -> str:
        return self.bucket_name

    def file_location(self) -> str:
        return f"{self.upload_destination}/{self.filename}"

    def timestamp_value(self) -> int:
        """Return the set timestamp, or the current time when it is 0."""
        return self.timestamp if self.timestamp != 0 else int(time.time())


@dataclass(frozen=True)
class PathUploadable:
    """An object identified directly by its path in a bucket."""

    bucket_name: str = ""
    filepath: str = ""
    timestamp: datetime | None = None

    def bucket_name_value(self) -> str:
        return self.bucket_name

    def file_location(self) -> str:
        return self.filepath

    def timestamp_value(self) -> int:
        """Return the Unix time of the timestamp, or 0 when there is none."""
        if self.timestamp is None:
            return 0
        return int(self.timestamp.timestamp())