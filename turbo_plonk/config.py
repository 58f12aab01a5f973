"""Constraint system configuration."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Type

import galois

from .errors import ParameterError
from .primitives.field import get_field


@dataclass
class CircuitConfig:
    """Configuration shared by a constraint system and the protocol consuming it.

    The quotient evaluation domain must be larger than the degree of the
    quotient polynomial (> 5 * size + 7 for degree-5 gates). Circuits with more
    than `small_size_threshold` rows use `quot_blowup`, smaller ones use
    `small_quot_blowup`.
    """
    field_name: str = "bls12_381"  # Key into primitives.field.FIELDS
    quot_blowup: int = 6
    small_quot_blowup: int = 16
    small_size_threshold: int = 4

    def __post_init__(self):
        get_field(self.field_name)
        if self.quot_blowup < 6:
            raise ParameterError(f"quot_blowup must be >= 6, got {self.quot_blowup}")
        if self.small_quot_blowup < self.quot_blowup:
            raise ParameterError(
                f"small_quot_blowup ({self.small_quot_blowup}) must be >= "
                f"quot_blowup ({self.quot_blowup})"
            )
        if self.small_size_threshold < 0:
            raise ParameterError("small_size_threshold must be non-negative")

    @property
    def field(self) -> Type[galois.FieldArray]:
        return get_field(self.field_name)

    def quot_eval_dom_size(self, size: int) -> int:
        """Quotient evaluation domain size for a circuit of `size` rows.

        Raises:
            ParameterError: If the domain is not larger than the quotient degree
        """
        from .constraints.gate import MAX_GATE_DEGREE

        if size > self.small_size_threshold:
            dom_size = size * self.quot_blowup
        else:
            dom_size = size * self.small_quot_blowup
        if dom_size <= MAX_GATE_DEGREE * size + 7:
            raise ParameterError(
                f"Quotient domain of size {dom_size} is too small for {size} rows "
                f"(need > {MAX_GATE_DEGREE * size + 7})"
            )
        return dom_size

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CircuitConfig':
        """Build from a dict with camelCase keys.

        Example:
        {
          "field": "goldilocks",
          "quotBlowup": 6,
          "smallQuotBlowup": 16,
          "smallSizeThreshold": 4
        }
        """
        return cls(
            field_name=data.get('field', 'bls12_381'),
            quot_blowup=data.get('quotBlowup', 6),
            small_quot_blowup=data.get('smallQuotBlowup', 16),
            small_size_threshold=data.get('smallSizeThreshold', 4),
        )

    @classmethod
    def from_json(cls, path: str) -> 'CircuitConfig':
        """Load from a JSON file (see from_dict for the layout)."""
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))
