"""
ValidationResult — outcome of validating one form payload.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ValidationResult:
    """Field-error map for a form; valid exactly when no field failed."""

    errors: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so the caller's dict cannot change the result.
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": dict(self.errors),
        }

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={sorted(self.errors)})"
