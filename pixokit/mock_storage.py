"""An in-memory storage client that records calls, for tests."""

from __future__ import annotations

import hashlib
import io
from dataclasses import MISSING, dataclass, field, fields
from typing import BinaryIO

from pixokit.storage import ResumableUploadResponse, SignedUrlOption, UploadableObject

_PUBLIC_URL_BASE = "https://storage.googleapis.com"
_SIGNED_URL_QUERY = (
    "X-Goog-Algorithm=GOOG4-RSA-SHA256&X-Goog-Credential=credential"
    "&X-Goog-Date=20210101T000000Z&X-Goog-Expires=3600"
    "&X-Goog-SignedHeaders=host&X-Goog-Signature=signature"
)

# Settings that survive a reset.
_KEPT_ON_RESET = frozenset({"find_files_with_name_empty", "find_files_with_name_queries"})


@dataclass
class MockStorageClient:
    """A storage client that records every call and can be told to fail."""

    public_url_num_times_called: int = 0
    public_url_error: Exception | None = None
    public_url_objects: list[UploadableObject] = field(default_factory=list)

    signed_url_num_times_called: int = 0
    signed_url_error: Exception | None = None
    signed_url_options: list[tuple[SignedUrlOption, ...]] = field(default_factory=list)
    signed_url_objects: list[UploadableObject] = field(default_factory=list)

    upload_file_num_times_called: int = 0
    upload_file_error: Exception | None = None
    upload_file_objects: list[UploadableObject] = field(default_factory=list)

    file_exists_num_times_called: int = 0
    file_should_exist: bool = True
    file_exists_error: Exception | None = None
    file_exists_objects: list[UploadableObject] = field(default_factory=list)

    copy_num_times_called: int = 0
    copy_error: Exception | None = None
    copy_src_objects: list[UploadableObject] = field(default_factory=list)
    copy_dest_objects: list[UploadableObject] = field(default_factory=list)

    read_file_num_times_called: int = 0
    read_file_error: Exception | None = None
    read_file_objects: list[UploadableObject] = field(default_factory=list)
    read_file_path: str = ""

    find_files_with_name_num_times_called: int = 0
    find_files_with_name_empty: bool = False
    find_files_with_name_error: Exception | None = None
    find_files_with_name_queries: list[tuple[str, str, str]] = field(default_factory=list)

    delete_file_num_times_called: int = 0
    delete_file_error: Exception | None = None
    delete_file_objects: list[UploadableObject] = field(default_factory=list)

    init_resumable_upload_num_times_called: int = 0
    init_resumable_upload_error: Exception | None = None
    init_resumable_upload_objects: list[UploadableObject] = field(default_factory=list)

    def reset(self) -> None:
        """Restore the defaults, keeping the find-files settings and queries."""
        for f in fields(self):
            if f.name in _KEPT_ON_RESET:
                continue
            if f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())
            else:
                setattr(self, f.name, f.default)

    def public_url(self, obj: UploadableObject) -> str:
        self.public_url_num_times_called += 1
        self.public_url_objects.append(obj)
        if self.public_url_error is not None:
            return ""
        return f"{_PUBLIC_URL_BASE}/{obj.bucket_name_value()}/{obj.file_location()}"

    def signed_url(self, obj: UploadableObject, *options: SignedUrlOption) -> str:
        self.signed_url_num_times_called += 1
        self.signed_url_objects.append(obj)
        self.signed_url_options.append(options)
        if self.signed_url_error is not None:
            raise self.signed_url_error
        return f"{_PUBLIC_URL_BASE}/{obj.bucket_name_value()}/{obj.file_location()}?{_SIGNED_URL_QUERY}"

    def checksum(self, obj: UploadableObject) -> str:
        """Return the location bytes followed by an empty MD5 digest, as a bracketed byte list."""
        data = obj.file_location().encode() + hashlib.md5().digest()
        return "[" + " ".join(str(b) for b in data) + "]"

    def upload_file(self, obj: UploadableObject, reader: BinaryIO) -> str:
        self.upload_file_num_times_called += 1
        self.upload_file_objects.append(obj)
        if self.upload_file_error is not None:
            raise self.upload_file_error
        return obj.file_location()

    def file_exists(self, obj: UploadableObject) -> bool:
        self.file_exists_num_times_called += 1
        self.file_exists_objects.append(obj)
        if self.file_exists_error is not None:
            raise self.file_exists_error
        return self.file_should_exist

    def find_files_with_name(self, bucket_name: str, prefix: str, filename: str) -> list[str]:
        self.find_files_with_name_num_times_called += 1
        self.find_files_with_name_queries.append((bucket_name, prefix, filename))
        if self.find_files_with_name_error is not None:
            raise self.find_files_with_name_error
        if self.find_files_with_name_empty:
            return []
        return [f"one/{filename}", f"two/{filename}"]

    def copy(self, src: UploadableObject, dest: UploadableObject) -> None:
        self.copy_num_times_called += 1
        self.copy_dest_objects.append(dest)
        self.copy_src_objects.append(src)
        if self.copy_error is not None:
            raise self.copy_error

    def read_file(self, obj: UploadableObject) -> BinaryIO:
        """Open ``read_file_path`` when set, otherwise a stream holding ``b"test"``; the caller closes it."""
        self.read_file_num_times_called += 1
        self.read_file_objects.append(obj)
        if self.read_file_error is not None:
            raise self.read_file_error
        if self.read_file_path:
            return open(self.read_file_path, "rb")
        return io.BytesIO(b"test")

    def delete_file(self, obj: UploadableObject) -> None:
        self.delete_file_num_times_called += 1
        self.delete_file_objects.append(obj)
        if self.delete_file_error is not None:
            raise self.delete_file_error

    def init_resumable_upload(self, obj: UploadableObject) -> ResumableUploadResponse | None:
        self.init_resumable_upload_num_times_called += 1
        self.init_resumable_upload_objects.append(obj)
        if self.init_resumable_upload_error is not None:
            raise self.init_resumable_upload_error
        return None