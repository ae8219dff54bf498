"""
Unit tests for kubelite data models.
"""

import json

import pytest
from pydantic import ValidationError

from kubelite.modules.api.models import ApiRequest, Patch, PatchOperation, Pod, encode_patches


class TestPatch:
    """Test the patch model."""

    def test_valid_operations(self):
        assert Patch(operation="add", path="/a", value=1).operation == PatchOperation.ADD
        assert Patch(operation="replace", path="/a", value=1).operation == PatchOperation.REPLACE

    def test_unset_operation_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Patch(operation=PatchOperation.UNSET, path="/metadata/labels/a", value="b")
        assert "patch operation must be set" in str(exc_info.value)

    def test_unknown_operation_rejected(self):
        with pytest.raises(ValidationError):
            Patch(operation="remove", path="/metadata/labels/a")

    def test_operation_required(self):
        with pytest.raises(ValidationError):
            Patch(path="/metadata/labels/a", value="b")

    def test_to_json_patch(self):
        patch = Patch(operation=PatchOperation.REPLACE, path="/metadata/labels/app", value="web")
        assert patch.to_json_patch() == {"op": "replace", "path": "/metadata/labels/app", "value": "web"}

    def test_to_json_patch_accepts_plain_string_operation(self):
        patch = Patch.model_construct(operation="add", path="/metadata/labels/a", value="b")
        assert patch.to_json_patch() == {"op": "add", "path": "/metadata/labels/a", "value": "b"}

    def test_encode_patches(self):
        patches = [
            Patch(operation="add", path="/metadata/labels/a", value=None),
            Patch(operation="replace", path="/metadata/labels/b", value=[1, 2]),
        ]
        assert json.loads(encode_patches(patches)) == [
            {"op": "add", "path": "/metadata/labels/a", "value": None},
            {"op": "replace", "path": "/metadata/labels/b", "value": [1, 2]},
        ]


class TestPod:
    """Test the pod model."""

    def test_missing_metadata(self):
        assert Pod.model_validate_json("{}").metadata is None

    def test_unknown_fields_ignored(self):
        pod = Pod.model_validate_json(
            '{"apiVersion": "v1", "metadata": {"name": "web-0", "uid": "abc"}, "status": {}}'
        )
        assert pod.metadata.name == "web-0"
        assert pod.metadata.labels is None

    def test_non_string_label_rejected(self):
        with pytest.raises(ValidationError):
            Pod.model_validate_json('{"metadata": {"labels": {"a": {"nested": true}}}}')

    @pytest.mark.parametrize(
        "body",
        [
            '{"metadata": "Bearer token-value"}',
            '{"metadata": {"name": ["Bearer token-value"]}}',
            '{"metadata": {"labels": {"a": {"token": "Bearer token-value"}}}}',
        ],
    )
    def test_errors_hide_input(self, body):
        with pytest.raises(ValidationError) as exc_info:
            Pod.model_validate_json(body)
        assert "token-value" not in str(exc_info.value)


class TestApiRequest:
    """Test the request container."""

    def test_defaults(self):
        request = ApiRequest(method="GET", url="https://kubernetes.test/api/v1")
        assert request.body is None
        assert request.headers == {}

    def test_immutable(self):
        request = ApiRequest(method="GET", url="https://kubernetes.test/api/v1")
        with pytest.raises(AttributeError):
            request.method = "PATCH"
