"""Text scanners that turn Java step classes into step definitions."""

from .annotations import AnnotationParser, contains_step_annotations
from .parameters import (
    ParameterClassifier,
    describe_type,
    generate_parameter_documentation,
    validate_parameter_consistency,
)

__all__ = [
    "AnnotationParser",
    "ParameterClassifier",
    "contains_step_annotations",
    "describe_type",
    "generate_parameter_documentation",
    "validate_parameter_consistency",
]
