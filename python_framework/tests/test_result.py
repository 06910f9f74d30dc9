"""
Tests for the Result monad.

Tests cover:
  - Success/Failure creation and introspection
  - map, flat_map transformations and short-circuiting
  - Side effects (peek, peek_failure)
  - from_computation at adapter boundaries
  - Pattern matching and equality
"""

from __future__ import annotations

import pytest

from railway import ErrorCode, Failure, Result, Success


class TestCreation:
    def test_success_wraps_value(self):
        result = Result.success(["http://a"])
        assert result.is_success()
        assert not result.is_failure()
        assert result.value() == ["http://a"]

    def test_success_accepts_empty_containers(self):
        assert Result.success({}).value() == {}
        assert Result.success([]).value() == []

    def test_success_rejects_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            Success(None)

    def test_failure_with_code_message_and_exception(self):
        ex = OSError("disk gone")
        result = Result.failure(ErrorCode.STORAGE_UNAVAILABLE_ERROR, "write failed", ex)
        assert result.is_failure()
        assert result.error().code == ErrorCode.STORAGE_UNAVAILABLE_ERROR
        assert result.error().message == "write failed"
        assert result.error().exception is ex

    def test_failure_rejects_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            Failure(None)

    def test_truthiness(self):
        assert Result.success(0)
        assert not Result.failure(ErrorCode.VALIDATION_ERROR, "bad")

    def test_value_on_failure_raises(self):
        with pytest.raises(ValueError, match="Cannot get value from a Failure"):
            Result.failure(ErrorCode.VALIDATION_ERROR, "bad").value()

    def test_error_on_success_raises(self):
        with pytest.raises(ValueError, match="Cannot get error from a Success"):
            Result.success(1).error()


class TestTransformations:
    def test_map_transforms_success_value(self):
        assert Result.success(5).map(lambda x: x * 2).value() == 10

    def test_map_short_circuits_on_failure(self):
        calls: list[int] = []
        result = Result.failure(ErrorCode.VALIDATION_ERROR, "bad").map(calls.append)
        assert result.is_failure()
        assert calls == []

    def test_flat_map_short_circuits_on_first_failure(self):
        calls: list[str] = []

        def load(_: int) -> Result[int]:
            calls.append("load")
            return Result.failure(ErrorCode.STORAGE_UNAVAILABLE_ERROR, "down")

        def save(x: int) -> Result[int]:
            calls.append("save")
            return Result.success(x)

        result = Result.success(1).flat_map(load).flat_map(save)
        assert result.error().code == ErrorCode.STORAGE_UNAVAILABLE_ERROR
        assert calls == ["load"]

    def test_either_dispatches_on_track(self):
        assert Result.success(2).either(lambda v: v + 1, lambda e: -1) == 3
        assert Result.failure(ErrorCode.VALIDATION_ERROR, "x").either(lambda v: v, lambda e: e.message) == "x"


class TestSideEffects:
    def test_peek_runs_only_on_success(self):
        seen: list[int] = []
        Result.success(7).peek(seen.append)
        Result.failure(ErrorCode.VALIDATION_ERROR, "bad").peek(seen.append)
        assert seen == [7]

    def test_peek_failure_runs_only_on_failure(self):
        seen: list[str] = []
        Result.success(7).peek_failure(lambda e: seen.append(e.message))
        Result.failure(ErrorCode.VALIDATION_ERROR, "bad").peek_failure(lambda e: seen.append(e.message))
        assert seen == ["bad"]


class TestFromComputation:
    def test_captures_return_value(self):
        result = Result.from_computation(lambda: b"{}", ErrorCode.ENCODING_ERROR, "encode failed")
        assert result.value() == b"{}"

    def test_captures_exception(self):
        def explode() -> bytes:
            raise ConnectionError("refused")

        result = Result.from_computation(explode, ErrorCode.STORAGE_UNAVAILABLE_ERROR, "read failed")
        assert result.error().code == ErrorCode.STORAGE_UNAVAILABLE_ERROR
        assert result.error().message == "read failed"
        assert isinstance(result.error().exception, ConnectionError)

    def test_none_return_becomes_failure(self):
        result = Result.from_computation(lambda: None, ErrorCode.ENCODING_ERROR, "no value")
        assert result.is_failure()


class TestPatternMatchingAndEquality:
    def test_match_success(self):
        match Result.success("ok"):
            case Success(v):
                assert v == "ok"
            case _:
                pytest.fail("expected Success")

    def test_match_failure(self):
        match Result.failure(ErrorCode.ENCODING_ERROR, "corrupt"):
            case Failure(err):
                assert err.message == "corrupt"
            case _:
                pytest.fail("expected Failure")

    def test_equality_compares_code_and_message(self):
        assert Result.success([1]) == Result.success([1])
        assert Result.failure(ErrorCode.VALIDATION_ERROR, "x") == Result.failure(ErrorCode.VALIDATION_ERROR, "x")
        assert Result.success(1) != Result.failure(ErrorCode.VALIDATION_ERROR, "x")

    def test_repr(self):
        assert repr(Result.success(1)) == "Success(1)"
        assert repr(Result.failure(ErrorCode.VALIDATION_ERROR, "x")) == "Failure(VALIDATION_ERROR: 'x')"
