"""Unit tests for the stored resource record codec."""

import json

import pytest

from capgate.core.enums import ErrorCode
from capgate.core.result import Failure, Success
from capgate.domain.entities.resource import Resource
from capgate.infrastructure.enums import InfrastructureErrorCode
from capgate.infrastructure.storage.resource_codec import (
    decode_resource,
    encode_resource,
    resource_to_dict,
)


@pytest.fixture
def resource():
    return Resource(
        id="r1",
        owner_id="alice",
        type="dataset-probe",
        data={"probe_id": "p-17"},
        default_mask={"data": 1},
        user_masks={"bob": {"data": 0}},
    )


@pytest.mark.unit
class TestResourceCodec:
    """Test encode/decode of resource records."""

    def test_encoded_record_shape(self, resource):
        record = json.loads(encode_resource(resource))

        assert record == {
            "id": "r1",
            "owner_id": "alice",
            "type": "dataset-probe",
            "data": {"probe_id": "p-17"},
            "default_mask": {"data": 1},
            "user_masks": {"bob": {"data": 0}},
        }

    def test_decode_accepts_bytes(self, resource):
        result = decode_resource(encode_resource(resource).encode())

        assert result == Success(value=resource)

    def test_missing_masks_default_to_empty(self):
        result = decode_resource('{"id":"r1","owner_id":"a","type":"t"}')

        assert isinstance(result, Success)
        assert result.value.default_mask == {}
        assert result.value.user_masks == {}

    def test_to_dict_copies_masks(self, resource):
        record = resource_to_dict(resource)
        record["user_masks"]["bob"]["data"] = 9

        assert resource.user_masks == {"bob": {"data": 0}}

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            "[]",
            '{"id":"r1","owner_id":"a"}',
            '{"id":"r1","owner_id":"a","type":"t","data":{"x":1}}',
            '{"id":"r1","owner_id":"a","type":"t","default_mask":{"data":"1"}}',
            '{"id":"r1","owner_id":"a","type":"t","default_mask":{"data":true}}',
            '{"id":"r1","owner_id":"a","type":"t","user_masks":{"bob":1}}',
            '{"id":"","owner_id":"a","type":"t"}',
        ],
    )
    def test_malformed_record(self, payload):
        result = decode_resource(payload)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STORE_CORRUPT_RECORD
        assert result.error.infrastructure_code == InfrastructureErrorCode.STORE_DECODE_ERROR
