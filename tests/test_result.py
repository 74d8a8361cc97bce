"""Tests for lib/result.py - Ok/Err values and how callers match on them."""

import pytest

from scaffold_cli.lib.errors import AwsCallError, LockNotResolvedError
from scaffold_cli.lib.result import Err, Ok, Result


def _first_error(*results: Result[int, str]) -> Result[int, str]:
    total = 0
    for result in results:
        match result:
            case Err() as e:
                return e
            case Ok(value):
                total += value
    return Ok(total)


class TestOkErr:
    """Tests for Ok and Err constructors."""

    def test_ok_holds_value(self) -> None:
        assert Ok(42).value == 42

    def test_err_holds_error(self) -> None:
        error = AwsCallError("GetItem", "tf-lock", "throttled")
        assert Err(error).error is error

    def test_ok_with_none_is_valid(self) -> None:
        assert Ok(None).value is None

    def test_results_are_frozen(self) -> None:
        result = Ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert Err(LockNotResolvedError("a-md5")) == Err(LockNotResolvedError("a-md5"))
        assert Ok(1) != Err(1)


class TestMatching:
    """Result values destructure in match statements."""

    def test_match_ok(self) -> None:
        match Ok("x"):
            case Ok(value):
                assert value == "x"
            case Err():
                pytest.fail("expected Ok")

    def test_match_err_with_typed_error(self) -> None:
        match Err(AwsCallError("DeleteBucket", "b", "BucketNotEmpty")):
            case Err(AwsCallError(operation, target, _)):
                assert operation == "DeleteBucket"
                assert target == "b"
            case _:
                pytest.fail("expected Err(AwsCallError)")

    def test_ok_none_matches_before_ok_value(self) -> None:
        match Ok(None):
            case Ok(None):
                matched = "none"
            case Ok(_):
                matched = "value"
        assert matched == "none"

    def test_errors_short_circuit(self) -> None:
        assert _first_error(Ok(1), Ok(2)) == Ok(3)
        assert _first_error(Ok(1), Err("boom"), Err("later")) == Err("boom")
