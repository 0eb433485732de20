"""
Shared plumbing for record validators.

Validators are pydantic models; their errors are translated into
field-level Violations so a caller can report every problem at once.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from devevent.core.errors import ValidationError, Violation


@dataclass
class ValidationResult:
    violations: list[Violation] = field(default_factory=list)
    values: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return not self.violations

    def raise_for_violations(self) -> dict[str, Any]:
        """Return the cleaned values, or raise ValidationError with every violation."""
        if self.violations:
            raise ValidationError(self.violations)
        return self.values


def _label(name: str) -> str:
    return name[:1].upper() + name[1:]


def _message(error: dict, labels: dict[str, str]) -> str:
    field_name = str(error["loc"][0]) if error["loc"] else "__root__"
    label = labels.get(field_name, _label(field_name))
    in_sequence = len(error["loc"]) > 1
    kind = error["type"]
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f"{label} is required"
    if kind in ("string_type", "list_type"):
        expected = "a list of strings" if kind == "list_type" else "a string"
        if in_sequence:
            return f"{label} items must be strings"
        return f"{label} must be {expected}"
    if kind == "string_too_short":
        if in_sequence:
            return f"{label} items cannot be empty"
        return f"{label} cannot be empty"
    if kind == "string_too_long":
        return f"{label} cannot exceed {ctx.get('max_length')} characters"
    if kind == "too_short":
        return f"{label} must contain at least one item"
    # Custom errors raised from field validators carry their own message
    return error["msg"]


def validate_with(
    model: Type[BaseModel],
    fields: dict[str, Any],
    labels: Optional[dict[str, str]] = None,
    context: Optional[dict[str, Any]] = None,
) -> ValidationResult:
    """Run `model` over `fields` and collect violations in field declaration order."""
    labels = labels or {}
    try:
        instance = model.model_validate(fields, context=context)
    except PydanticValidationError as e:
        order = {name: i for i, name in enumerate(model.model_fields)}
        violations = []
        seen = set()
        for error in e.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "__root__"
            violation = Violation(field_name, _message(error, labels))
            if violation in seen:
                continue
            seen.add(violation)
            violations.append(violation)
        violations.sort(key=lambda v: order.get(v.field, len(order)))
        return ValidationResult(violations=violations)

    return ValidationResult(values=instance.model_dump())
