"""
quote_processor.pricing

Purpose:
    Pluggable pricing collaborator and the rounding rule applied to every quote.

Design Notes:
    - A pricing function is any callable (subject) -> number. It must not do I/O.
    - Floats are converted through their shortest repr (Decimal(str(x))) before
      rounding, so 10.005 rounds to 10.01 rather than to the binary neighbour.
    - LengthBasedPricing is the default: len(subject) * 100 scaled by a random
      factor in [0.5, 1.5). Inject a seeded random.Random for reproducible output.

Author:
    Kanir Pandya

Created:
    2026-02-21
"""

from __future__ import annotations

import random
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Callable, Union

Number = Union[Decimal, float, int]
PricingFunction = Callable[[str], Number]

TWO_PLACES = Decimal("0.01")


def round_half_up(value: Number) -> Decimal:
    """
    Round a price to two fractional digits using ROUND_HALF_UP.

    Raises:
        ValueError: if the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Price must be numeric, got {value!r}")
    try:
        if isinstance(value, Decimal):
            dec = value
        elif isinstance(value, (int, float)):
            dec = Decimal(str(value))
        else:
            raise ValueError(f"Price must be numeric, got {type(value).__name__}")
    except InvalidOperation as exc:
        raise ValueError(f"Price is not a valid number: {value!r}") from exc

    if not dec.is_finite():
        raise ValueError(f"Price must be finite, got {value!r}")

    # Widen precision so large prices keep all integer digits plus two places.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, dec.adjusted() + 3)
        rounded = dec.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    # -0.001 rounds to -0.00; emit 0.00 instead.
    if rounded.is_zero():
        return rounded.copy_abs()
    return rounded


class LengthBasedPricing:
    """Default pricing: subject length drives the base price, with +/-50% variation."""

    def __init__(
        self,
        *,
        unit_price: int = 100,
        min_factor: float = 0.5,
        max_factor: float = 1.5,
        rng: random.Random | None = None,
    ) -> None:
        if max_factor < min_factor:
            raise ValueError("max_factor must be >= min_factor")
        self._unit_price = unit_price
        self._min_factor = min_factor
        self._span = max_factor - min_factor
        self._rng = rng or random.Random()

    def __call__(self, subject: str) -> float:
        base = len(subject) * self._unit_price
        return base * (self._min_factor + self._rng.random() * self._span)


def fixed_pricing(value: Number) -> PricingFunction:
    def _price(_subject: str) -> Number:
        return value

    return _price
