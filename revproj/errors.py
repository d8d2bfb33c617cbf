"""Domain errors raised by the projection engine."""

from __future__ import annotations


class InvalidAssumptions(ValueError):
    """One or more inputs are outside their allowed bounds.

    ``errors`` maps each failing field name to a short reason.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{name}: {reason}" for name, reason in self.errors.items())
        super().__init__(f"Invalid assumptions ({detail})")

    @property
    def fields(self) -> list[str]:
        return list(self.errors)


class UnknownCurrency(ValueError):
    def __init__(self, code: object) -> None:
        self.code = code
        super().__init__(f"Currency {code!r} not supported")
