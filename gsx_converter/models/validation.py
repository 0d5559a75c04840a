"""
Consistency checks for a Configuration.

A configuration built by the parsers and the merger is consistent by
construction; these checks guard the serializer against graphs assembled
by hand or loaded from an edited document.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .configuration import Configuration


@dataclass
class ValidationError:
    """Represents a single validation error."""

    field: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.field}: {self.message} (value: {self.value})"
        return f"{self.field}: {self.message}"


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        self.errors.append(ValidationError(field, message, value))

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def __str__(self) -> str:
        if self.is_valid:
            if self.has_warnings:
                return f"Valid (with {len(self.warnings)} warnings)"
            return "Valid"
        return f"Invalid ({len(self.errors)} errors)"

    def get_error_messages(self) -> List[str]:
        """Get all error messages as strings."""
        return [str(error) for error in self.errors]


def validate_configuration(config: 'Configuration') -> ValidationResult:
    """
    Check the invariants of a configuration graph.

    Errors:
        - empty gate, de-ice or group identifiers
        - gate identifiers that are not unique (case-insensitive)

    Warnings:
        - group members that do not resolve to a gate

    Args:
        config: Configuration to check

    Returns:
        ValidationResult
    """
    result = ValidationResult()

    seen = {}
    for index, gate in enumerate(config.gates):
        if not gate.gate_id or not gate.gate_id.strip():
            result.add_error(f"gates[{index}].gate_id", "gate identifier is empty")
            continue
        folded = gate.gate_id.casefold()
        if folded in seen:
            result.add_error(
                f"gates[{index}].gate_id",
                f"duplicate gate identifier (first seen at gates[{seen[folded]}])",
                gate.gate_id,
            )
        else:
            seen[folded] = index

    for index, deice in enumerate(config.deices):
        if not deice.id:
            result.add_error(f"deices[{index}].id", "de-ice identifier is empty")

    for index, group in enumerate(config.gate_groups):
        if not group.id:
            result.add_error(f"gate_groups[{index}].id", "group identifier is empty")
        for member in group.members:
            if member.casefold() not in seen:
                result.add_warning(f"group '{group.id}' references unknown gate '{member}'")

    return result
