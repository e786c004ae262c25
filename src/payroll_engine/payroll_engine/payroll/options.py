from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.exceptions import InputError

_KEY_ALIASES = {
    "validate_overtime": "validate_overtime",
    "validateOvertime": "validate_overtime",
    "force_payment": "force_payment",
    "forcePayment": "force_payment",
}


@dataclass(frozen=True)
class PayrollOptions:
    """Recognized options for payroll generation and payment submission.

    validate_overtime: report working-hours violations as warnings when
        generating. Payment submission always checks them.
    force_payment: submit for payment even when overtime approval is pending or
        working-hours rules are violated. A payout destination is still required.
    """

    validate_overtime: bool = True
    force_payment: bool = False

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "PayrollOptions":
        if not values:
            return cls()

        unknown = sorted(k for k in values if k not in _KEY_ALIASES)
        if unknown:
            raise InputError(f"Unrecognized payroll options: {', '.join(unknown)}")

        kwargs: dict[str, bool] = {}
        for key, value in values.items():
            if not isinstance(value, bool):
                raise InputError(f"Option {key} must be true or false")
            name = _KEY_ALIASES[key]
            if name in kwargs and kwargs[name] != value:
                raise InputError(f"Option {name} given twice with different values")
            kwargs[name] = value
        return cls(**kwargs)
