"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from mdnest.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="build_tree", data={"node_count": 3})
        assert result.ok is True
        assert result.op == "build_tree"
        assert result.data == {"node_count": 3}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="Not found")
        result = ServiceResult(ok=False, op="read_form", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {}

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("build_tree", "UNREADABLE", "denied", path="/x")
        assert result.ok is False
        assert result.data == {}
        assert result.error == ServiceError(
            code="UNREADABLE", message="denied", detail={"path": "/x"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="test", data={"key": "value"}, warnings=["careful"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["key"] == "value"
        assert parsed["warnings"] == ["careful"]
        assert parsed["error"] is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
