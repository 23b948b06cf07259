"""Parameter inference for step definitions.

Placeholders are read from the step text where possible and synthesized from
the declared Java type otherwise. The same module produces the human-readable
type documentation and the per-pattern consistency report.
"""

from __future__ import annotations

import re
from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Set

from ..models import ParameterInfo, StepDefinition

PARAM_PATTERN = re.compile(r"(?:final\s+)?(\w+(?:<[^>]+>)?)\s+(\w+)")
PLACEHOLDER_PATTERN = re.compile(r"\{([^}]+)\}")
_GENERIC_SUFFIX = re.compile(r"<.*>")

DATA_TABLE_TYPE = "DataTable"
STANDARD_LIBRARY_PREFIX = "java."

TYPE_PLACEHOLDERS: Mapping[str, str] = MappingProxyType(
    {
        "String": "{string}",
        "int": "{int}",
        "Integer": "{int}",
        "long": "{long}",
        "Long": "{long}",
        "double": "{double}",
        "Double": "{double}",
        "float": "{float}",
        "Float": "{float}",
        "boolean": "{boolean}",
        "Boolean": "{boolean}",
        "char": "{char}",
        "Character": "{char}",
    }
)

TYPE_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "String": "String parameters for text values",
        "int": "Integer numeric parameters",
        "Integer": "Integer numeric parameters",
        "long": "Long numeric parameters",
        "Long": "Long numeric parameters",
        "double": "Double precision numeric parameters",
        "Double": "Double precision numeric parameters",
        "float": "Float precision numeric parameters",
        "Float": "Float precision numeric parameters",
        "boolean": "Boolean true/false parameters",
        "Boolean": "Boolean true/false parameters",
        "char": "Single character parameters",
        "Character": "Single character parameters",
    }
)

COLLECTION_DESCRIPTIONS: tuple[tuple[str, str], ...] = (
    ("List<", "List collection parameters"),
    ("Map<", "Map/dictionary parameters"),
    ("Set<", "Set collection parameters"),
)

DATA_TABLE_DESCRIPTION = "Cucumber data table parameters"
CUSTOM_TYPE_PREFIX = "Custom parameter type: "

_TABLE_TYPE_MARKERS: frozenset[str] = frozenset({DATA_TABLE_TYPE, "List<", "Map<", "Table"})


def base_type(java_type: str) -> str:
    """Strip the generic suffix: ``List<Map<String, String>>`` -> ``List``."""
    return _GENERIC_SUFFIX.sub("", java_type)


def is_custom_type(java_type: str) -> bool:
    base = base_type(java_type)
    return (
        base not in TYPE_PLACEHOLDERS
        and not base.startswith(STANDARD_LIBRARY_PREFIX)
        and base != DATA_TABLE_TYPE
    )


def is_data_table_type(java_type: str) -> bool:
    return any(marker in java_type for marker in _TABLE_TYPE_MARKERS) or is_custom_type(java_type)


def is_data_table_step(pattern: str) -> bool:
    return pattern.strip().endswith(":")


def extract_placeholders(pattern: str) -> List[str]:
    """Return every ``{token}`` in ``pattern``, left to right."""
    return [f"{{{match.group(1)}}}" for match in PLACEHOLDER_PATTERN.finditer(pattern)]


def generate_placeholder(java_type: str) -> str:
    base = base_type(java_type)
    return TYPE_PLACEHOLDERS.get(base, f"{{{base}}}")


def describe_type(java_type: str) -> str:
    """Return the documentation string used in the ``parameter_types`` block."""
    base = base_type(java_type)
    if base in TYPE_DESCRIPTIONS:
        return TYPE_DESCRIPTIONS[base]
    for marker, description in COLLECTION_DESCRIPTIONS:
        if marker in java_type:
            return description
    if base == DATA_TABLE_TYPE:
        return DATA_TABLE_DESCRIPTION
    if is_custom_type(java_type):
        return f"{CUSTOM_TYPE_PREFIX}{base}"
    return f"Parameter type: {java_type}"


def split_parameters(raw: str) -> List[str]:
    # Plain split: a comma inside <...> splits the entry, and the halves rarely
    # match PARAM_PATTERN.
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


def parse_parameters(raw: str) -> List[ParameterInfo]:
    """Parse ``[final] Type name`` entries; entries that do not match are skipped."""
    parameters: List[ParameterInfo] = []
    for entry in split_parameters(raw):
        match = PARAM_PATTERN.search(entry)
        if match is None:
            continue
        parameters.append(ParameterInfo(java_type=match.group(1), name=match.group(2)))
    return parameters


class ParameterClassifier:
    """Assigns placeholders and table/custom flags to method parameters."""

    def classify(self, raw_parameters: str, pattern: str) -> List[ParameterInfo]:
        parameters = parse_parameters(raw_parameters)
        self.assign(parameters, pattern)
        return parameters

    def enhance_step_parameters(self, step: StepDefinition) -> None:
        """Recompute placeholders and flags for a step's existing parameters."""
        if step.parameters:
            self.assign(step.parameters, step.pattern)

    def assign(self, parameters: Sequence[ParameterInfo], pattern: str) -> None:
        table_step = is_data_table_step(pattern)
        queue = extract_placeholders(pattern)
        position = 0
        for param in parameters:
            param.is_data_table = table_step and is_data_table_type(param.java_type)
            param.is_custom_type = is_custom_type(param.java_type)
            if position < len(queue):
                param.placeholder = queue[position]
                position += 1
            elif param.is_data_table:
                param.placeholder = None
            else:
                param.placeholder = generate_placeholder(param.java_type)


def extract_parameter_types(steps: Iterable[StepDefinition]) -> List[str]:
    """Distinct declared parameter types across ``steps``, first-seen order."""
    seen: Dict[str, None] = {}
    for step in steps:
        for param in step.parameters:
            if param.java_type:
                seen.setdefault(param.java_type, None)
    return list(seen)


def generate_parameter_documentation(steps: Iterable[StepDefinition]) -> Dict[str, str]:
    return {java_type: describe_type(java_type) for java_type in extract_parameter_types(steps)}


def validate_parameter_consistency(steps: Iterable[StepDefinition]) -> List[str]:
    """Warn about step texts declared with more than one parameter-type signature."""
    signatures: Dict[str, Set[tuple[str, ...]]] = defaultdict(set)
    for step in steps:
        signatures[step.pattern].add(step.parameter_types)

    warnings: List[str] = []
    for pattern, variants in signatures.items():
        if len(variants) > 1:
            rendered = ", ".join(
                "(" + ", ".join(variant) + ")" for variant in sorted(variants)
            )
            warnings.append(
                f"Step '{pattern}' has inconsistent parameter types: {rendered}"
            )
    return warnings


__all__ = [
    "CUSTOM_TYPE_PREFIX",
    "DATA_TABLE_TYPE",
    "PARAM_PATTERN",
    "ParameterClassifier",
    "TYPE_DESCRIPTIONS",
    "TYPE_PLACEHOLDERS",
    "base_type",
    "describe_type",
    "extract_parameter_types",
    "extract_placeholders",
    "generate_parameter_documentation",
    "generate_placeholder",
    "is_custom_type",
    "is_data_table_step",
    "is_data_table_type",
    "parse_parameters",
    "split_parameters",
    "validate_parameter_consistency",
]
