"""Core data models shared across steplib components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class StepCategory(Enum):
    """Annotation kinds a step definition can belong to."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"

    @property
    def marker(self) -> str:
        """Annotation name as written in source, without the ``@``."""
        return self.value

    @property
    def block_key(self) -> str:
        """Top-level key of the category's block in the step library document."""
        return f"{self.name.lower()}_steps"


@dataclass
class ParameterInfo:
    """Parameter inferred from a step method signature."""

    java_type: str
    name: str
    placeholder: Optional[str] = None
    is_data_table: bool = False
    is_custom_type: bool = False


@dataclass(eq=False)
class StepDefinition:
    """One annotated step method discovered in a source file.

    Identity is the (category, pattern) pair; parameters and provenance are
    ignored by equality and hashing.
    """

    category: StepCategory
    pattern: str
    parameters: List[ParameterInfo] = field(default_factory=list)
    method_name: Optional[str] = None
    class_name: Optional[str] = None
    line_number: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepDefinition):
            return NotImplemented
        return self.category is other.category and self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash((self.category, self.pattern))

    @property
    def parameter_types(self) -> tuple[str, ...]:
        return tuple(param.java_type for param in self.parameters)


__all__ = ["ParameterInfo", "StepCategory", "StepDefinition"]
