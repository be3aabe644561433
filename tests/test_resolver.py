from __future__ import annotations

import pytest

from asdctl.core.errors import BrightnessResolutionError
from asdctl.core.model import BrightnessRange
from asdctl.core.resolver import resolve
from asdctl.core.token import parse_token

STUDIO_DISPLAY = BrightnessRange(minimum=400, maximum=60000)


def _resolve(text: str, current: int | None = None) -> int:
    token = parse_token(text)
    assert token is not None
    return resolve(token, STUDIO_DISPLAY, current)


@pytest.mark.parametrize(
    ("text", "expected"),
    [("999999", 60000), ("0", 400), ("20000", 20000), ("400", 400), ("60000", 60000)],
)
def test_absolute_is_clamped(text: str, expected: int) -> None:
    assert _resolve(text) == expected


@pytest.mark.parametrize(
    ("text", "current", "expected"),
    [("+100000", 59000, 60000), ("-100000", 500, 400), ("+5960", 30000, 35960), ("-1000", 30000, 29000)],
)
def test_relative_is_applied_to_current_and_clamped(text: str, current: int, expected: int) -> None:
    assert _resolve(text, current) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [("50%", 30200), ("100%", 60000), ("0%", 400), ("250%", 60000), ("1%", 996)],
)
def test_absolute_percentage_scales_span(text: str, expected: int) -> None:
    assert _resolve(text) == expected


def test_relative_percentage_scales_delta() -> None:
    # 10% of 59600
    assert _resolve("+10%", 30000) == 35960
    assert _resolve("-10%", 30000) == 24040
    assert _resolve("-100%", 30000) == 400


@pytest.mark.parametrize("current", [400, 12345, 60000])
def test_zero_percent_delta_keeps_current(current: int) -> None:
    assert _resolve("+0%", current) == current
    assert _resolve("-0%", current) == current


def test_relative_without_current_value_is_rejected() -> None:
    token = parse_token("+100")
    assert token is not None
    with pytest.raises(BrightnessResolutionError):
        resolve(token, STUDIO_DISPLAY)
