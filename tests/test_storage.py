import time
from datetime import datetime, timedelta, timezone

import pytest

from pixokit.errors import RequiredError
from pixokit.storage import (
    BasicUploadable,
    PathUploadable,
    ResumableUploadResponse,
    SignedUrlOption,
    SignedUrlPartsRequest,
    UploadableObject,
)


def test_basic_uploadable_location_joins_destination_and_filename():
    obj = BasicUploadable(bucket_name="bucket", upload_destination="testdata", filename="test-file.txt")
    assert obj.file_location() == "testdata/test-file.txt"
    assert obj.bucket_name_value() == "bucket"
    assert isinstance(obj, UploadableObject)


def test_basic_uploadable_keeps_given_timestamp():
    obj = BasicUploadable(timestamp=1234)
    assert obj.timestamp_value() == 1234


def test_basic_uploadable_zero_timestamp_uses_now():
    before = int(time.time())
    value = BasicUploadable().timestamp_value()
    after = int(time.time())
    assert before <= value <= after


def test_path_uploadable_location_and_bucket():
    obj = PathUploadable(bucket_name="bucket", filepath="a/b/c.txt")
    assert obj.file_location() == "a/b/c.txt"
    assert obj.bucket_name_value() == "bucket"
    assert isinstance(obj, UploadableObject)


def test_path_uploadable_without_timestamp_is_zero():
    assert PathUploadable(filepath="x").timestamp_value() == 0


def test_path_uploadable_timestamp_is_unix_seconds():
    stamp = datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert PathUploadable(timestamp=stamp).timestamp_value() == 1700000000


def test_empty_path_uploadable_has_empty_location():
    obj = PathUploadable()
    assert obj.file_location() == ""
    assert obj.bucket_name_value() == ""


def test_signed_url_option_defaults():
    option = SignedUrlOption()
    assert option.lifetime == timedelta(0)
    assert option.content_disposition == ""
    assert option.method == ""


def test_resumable_upload_response_header_defaults_empty():
    response = ResumableUploadResponse(upload_url="u", method="PUT")
    assert response.signed_header == {}
    assert response.method == "PUT"


def test_parts_request_round_trip():
    data = {"id": 3, "filename": "file.zip", "numChunks": 5}
    request = SignedUrlPartsRequest.from_dict(data)
    assert request == SignedUrlPartsRequest(id=3, filename="file.zip", num_chunks=5)
    assert request.to_dict() == data


@pytest.mark.parametrize("missing", ["id", "filename", "numChunks"])
def test_parts_request_requires_every_field(missing):
    data = {"id": 3, "filename": "file.zip", "numChunks": 5}
    del data[missing]
    with pytest.raises(RequiredError) as info:
        SignedUrlPartsRequest.from_dict(data)
    assert info.value.field_name == missing