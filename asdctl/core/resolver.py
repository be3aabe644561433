"""Conversion of brightness tokens into the value written to a device."""

from __future__ import annotations

from asdctl.core.errors import BrightnessResolutionError
from asdctl.core.model import BrightnessRange, BrightnessToken


def resolve(token: BrightnessToken, bounds: BrightnessRange, current: int | None = None) -> int:
    """Return the target brightness for ``token`` within ``bounds``.

    Percentages are fractions of the model's span; an absolute percentage is
    offset from the minimum, a relative one only scales the delta. Relative
    tokens need the value currently held by the device. The result is always
    clamped into ``bounds``.
    """
    if not token.is_relative:
        if token.is_percentage:
            percent = max(0, min(100, token.magnitude))
            return bounds.clamp(bounds.minimum + percent * bounds.span // 100)
        return bounds.clamp(token.magnitude)

    if current is None:
        raise BrightnessResolutionError("Relative brightness change requires the current brightness")

    delta = token.magnitude
    if token.is_percentage:
        delta = delta * bounds.span // 100
    return bounds.clamp(current + token.sign * delta)
