"""Tests for relkit.core.result."""

from __future__ import annotations

import pytest

from relkit.core.result import Err, Ok, Result


def _parse_port(raw: str) -> Result[int, str]:
    if not raw.isdigit():
        return Err(f"not a number: {raw}")
    return Ok(int(raw))


def test_map_transforms_ok_only() -> None:
    assert _parse_port("2").map(lambda v: v * 10) == Ok(20)
    assert _parse_port("x").map(lambda v: v * 10) == Err("not a number: x")


def test_map_err_transforms_err_only() -> None:
    ok = Ok("v1.2.0")
    assert ok.map_err(str.upper) is ok
    assert Err("boom").map_err(str.upper) == Err("BOOM")


def test_pattern_matching() -> None:
    match _parse_port("8080"):
        case Ok(value):
            assert value == 8080
        case Err(_):
            pytest.fail("expected Ok")
    assert repr(Err("x")) == "Err('x')"
