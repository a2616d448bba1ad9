"""Turns the model's free-text answer into a bounded, non-negative amount."""

import math
import re

from receipt_total.errors.exceptions import AnalysisValidationError

MAX_AMOUNT = 1_000_000_000

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


def normalize_amount(raw_text: str) -> str:
    """Validate the model's answer and return it trimmed.

    The trimmed text is returned as-is so the model's decimal formatting
    is preserved (``"500.00"`` stays ``"500.00"``).

    Raises:
        AnalysisValidationError: INVALID_AI_RESPONSE, INVALID_AMOUNT or
            AMOUNT_TOO_LARGE.
    """
    text = raw_text.strip()
    amount = _parse(text)
    if amount < 0:
        raise AnalysisValidationError(
            f"Extracted amount cannot be negative: {text}",
            code="INVALID_AMOUNT",
        )
    if amount > MAX_AMOUNT:
        raise AnalysisValidationError(
            f"Extracted amount exceeds the maximum of {MAX_AMOUNT}: {text}",
            code="AMOUNT_TOO_LARGE",
        )
    return text


def _parse(text: str) -> float:
    if not _DECIMAL_RE.match(text):
        raise AnalysisValidationError(
            f"AI did not return a valid number: {text[:100]!r}",
            code="INVALID_AI_RESPONSE",
        )
    amount = float(text)
    if not math.isfinite(amount):
        raise AnalysisValidationError(
            f"AI did not return a finite number: {text[:100]!r}",
            code="INVALID_AI_RESPONSE",
        )
    return amount
