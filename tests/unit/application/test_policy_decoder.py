"""Unit tests for application policy – PolicyDecoder."""

from __future__ import annotations

import pytest

from policy_engine.application.policy import (
    DecodeReport,
    PolicyDecoder,
    parse_content_list,
    parse_role_object,
)
from policy_engine.kernel.errors import DecodeError
from policy_engine.kernel.security import Role
from policy_engine.kernel.types import Err, Ok
from policy_engine.testing.fakes import CapturingLogger


# ---------------------------------------------------------------------------
# Per-entry parsing
# ---------------------------------------------------------------------------


class TestParseContentList:
    def test_valid_entry(self) -> None:
        result = parse_content_list("admin", ["read", "write"])
        assert isinstance(result, Ok)
        assert result.value == Role("admin", ["read", "write"])

    def test_tuple_accepted(self) -> None:
        assert parse_content_list("admin", ("read",)).is_ok()

    def test_empty_list_is_valid(self) -> None:
        result = parse_content_list("guest", [])
        assert result.is_ok()
        assert result.unwrap().allowed_content == frozenset()

    def test_null_value(self) -> None:
        result = parse_content_list("admin", None)
        assert isinstance(result, Err)
        assert result.error.key == "admin"
        assert "null" in result.error.message

    @pytest.mark.parametrize("value", ["read", {"a": 1}, 3, 1.5, True, {"read"}])
    def test_non_list_value(self, value: object) -> None:
        result = parse_content_list("admin", value)
        assert isinstance(result, Err)
        assert result.error.errors[0]["expected_type"] == "list"
        assert result.error.errors[0]["actual_type"] == type(value).__name__

    def test_non_string_item(self) -> None:
        result = parse_content_list("admin", ["read", 1, None])
        assert isinstance(result, Err)
        assert [e["actual_type"] for e in result.error.errors] == ["int", "NoneType"]

    def test_empty_key(self) -> None:
        assert parse_content_list("", ["read"]).is_err()

    def test_non_string_key(self) -> None:
        result = parse_content_list(1, ["read"])  # type: ignore[arg-type]
        assert isinstance(result, Err)
        assert result.error.errors == [{"expected_type": "str", "actual_type": "int"}]


class TestParseRoleObject:
    def test_object_entry(self) -> None:
        result = parse_role_object("admin", {"allowedContent": ["read"], "metadata": {"t": 1}})
        role = result.unwrap()
        assert role == Role("admin", ["read"])
        assert role.metadata["t"] == 1

    def test_declared_name_kept(self) -> None:
        role = parse_role_object("key", {"roleName": "declared", "allowedContent": []}).unwrap()
        assert role.name == "declared"

    def test_list_entry_falls_back(self) -> None:
        assert parse_role_object("admin", ["read"]).unwrap() == Role("admin", ["read"])

    def test_bad_object(self) -> None:
        result = parse_role_object("admin", {"allowedContent": "read"})
        assert isinstance(result, Err)
        assert result.error.key == "admin"

    def test_non_string_key_with_object(self) -> None:
        result = parse_role_object(7, {"roleName": "x", "allowedContent": []})  # type: ignore[arg-type]
        assert isinstance(result, Err)


# ---------------------------------------------------------------------------
# Batch decoding
# ---------------------------------------------------------------------------


class TestDecodePartialSuccess:
    def test_all_valid(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"admin": ["read", "write"], "user": ["read"]})
        assert set(report.roles) == {"admin", "user"}
        assert report.errors == {}
        assert report.ok is True
        assert report.total == 2

    def test_skips_invalid(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"a": ["x"], "b": "not-a-list"})
        assert list(report.roles) == ["a"]
        assert list(report.errors) == ["b"]
        assert report.succeeded_count == 1
        assert report.failed_count == 1

    def test_non_string_key_skipped(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"a": ["x"], 1: ["y"]})  # type: ignore[dict-item]
        assert list(report.roles) == ["a"]
        assert list(report.errors) == [1]

    def test_unpacks_as_pair(self, policy_decoder: PolicyDecoder) -> None:
        roles, errors = policy_decoder.decode({"a": ["x"], "b": None})
        assert list(roles) == ["a"]
        assert list(errors) == ["b"]

    def test_all_invalid_does_not_raise(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"a": 1, "b": None})
        assert report.roles == {}
        assert report.failed_count == 2

    def test_empty_input(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({})
        assert report.roles == {}
        assert report.total == 0

    def test_result_is_read_only(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"a": ["x"]})
        with pytest.raises(TypeError):
            report.roles["b"] = Role("b")  # type: ignore[index]

    def test_deterministic(self, policy_decoder: PolicyDecoder) -> None:
        first = policy_decoder.decode({"a": ["x", "y"], "b": ["z"]})
        second = policy_decoder.decode({"b": ["z"], "a": ["y", "x"]})
        assert dict(first.roles) == dict(second.roles)

    def test_failed_keys_limited(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({f"k{i}": None for i in range(8)})
        assert report.failed_keys() == ["k0", "k1", "k2", "k3", "k4"]
        assert len(report.failed_keys(limit=None)) == 8

    def test_summary(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"a": None, "b": None, "c": None, "d": None})
        assert report.summary().count(":") == 3
        assert report.summary().startswith("a: ")


class TestDecodeStrict:
    def test_any_failure_raises(self, policy_decoder: PolicyDecoder) -> None:
        with pytest.raises(DecodeError) as exc_info:
            policy_decoder.decode({"a": ["x"], "b": "not-a-list"}, allow_partial_success=False)
        assert exc_info.value.failed_keys == ["b"]
        assert "1 of 2" in exc_info.value.message

    def test_total_failure_raises(self, policy_decoder: PolicyDecoder) -> None:
        with pytest.raises(DecodeError) as exc_info:
            policy_decoder.decode({"a": 1, "b": None}, allow_partial_success=False)
        assert "Failed to decode any policy entries" in exc_info.value.message
        assert set(exc_info.value.errors) == {"a", "b"}

    def test_message_quotes_first_three(self) -> None:
        decoder = PolicyDecoder(logger=CapturingLogger())
        raw = {k: None for k in "abcde"}
        with pytest.raises(DecodeError) as exc_info:
            decoder.decode(raw, allow_partial_success=False)
        message = exc_info.value.message
        assert "a: " in message and "c: " in message
        assert "d: " not in message
        assert len(exc_info.value.errors) == 5

    def test_empty_input_rejected(self, policy_decoder: PolicyDecoder) -> None:
        with pytest.raises(DecodeError, match="no entries"):
            policy_decoder.decode({}, allow_partial_success=False)

    def test_all_valid_passes(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode({"a": ["x"]}, allow_partial_success=False)
        assert isinstance(report, DecodeReport)
        assert list(report.roles) == ["a"]

    def test_non_mapping_input(self, policy_decoder: PolicyDecoder) -> None:
        with pytest.raises(DecodeError):
            policy_decoder.decode(["admin"])  # type: ignore[arg-type]


class TestDecodeRoleObjects:
    def test_mixed_formats(self, policy_decoder: PolicyDecoder) -> None:
        report = policy_decoder.decode_role_objects(
            {
                "admin": {"allowedContent": ["read", "write"], "metadata": {"tier": 1}},
                "user": ["read"],
                "broken": {"allowedContent": 3},
            }
        )
        assert set(report.roles) == {"admin", "user"}
        assert report.roles["admin"].metadata["tier"] == 1
        assert list(report.errors) == ["broken"]

    def test_strict(self, policy_decoder: PolicyDecoder) -> None:
        with pytest.raises(DecodeError):
            policy_decoder.decode_role_objects({"broken": {}}, allow_partial_success=False)


class TestDecoderLogging:
    def test_logs_skip_per_entry(
        self, policy_decoder: PolicyDecoder, capturing_logger: CapturingLogger
    ) -> None:
        policy_decoder.decode({"a": ["x"], "b": None, "c": 1})
        skips = capturing_logger.find("policy_validation_skip")
        assert [e.extra["role"] for e in skips] == ["b", "c"]
        assert all(e.level == "warning" for e in skips)

    def test_logs_summary(
        self, policy_decoder: PolicyDecoder, capturing_logger: CapturingLogger
    ) -> None:
        policy_decoder.decode({"a": ["x"], "b": None})
        (done,) = capturing_logger.find("policy_decoder.completed")
        assert done.extra["successful_items"] == 1
        assert done.extra["failed_items"] == 1
        (partial,) = capturing_logger.find("policy_decoder.partial_failure")
        assert partial.extra["failed_keys"] == ["b"]

    def test_no_partial_warning_when_clean(
        self, policy_decoder: PolicyDecoder, capturing_logger: CapturingLogger
    ) -> None:
        policy_decoder.decode({"a": ["x"]})
        assert capturing_logger.find("policy_decoder.partial_failure") == []
