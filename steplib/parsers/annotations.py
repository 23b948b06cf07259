"""Regex scanner for Cucumber step annotations in Java source text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from re import Pattern
from types import MappingProxyType
from typing import List, Mapping, Optional, Set

from ..logging import get_logger
from ..models import StepCategory, StepDefinition
from .parameters import ParameterClassifier

# Quoted text keeps its backslash escapes verbatim; they are not decoded.
_QUOTED_TEXT = r'"([^"\\]*(?:\\.[^"\\]*)*)"'


def _annotation_pattern(marker: str) -> Pattern[str]:
    return re.compile(rf"@{marker}\s*\(\s*{_QUOTED_TEXT}\s*\)", re.MULTILINE)


ANNOTATION_PATTERNS: Mapping[StepCategory, Pattern[str]] = MappingProxyType(
    {category: _annotation_pattern(category.marker) for category in StepCategory}
)

METHOD_PATTERN = re.compile(
    r"public\s+(?:final\s+)?void\s+(\w+)\s*\(([^)]*)\)\s*\{",
    re.MULTILINE,
)

IMPORT_PATTERN = re.compile(r"import\s+([\w.]+);")

_logger = get_logger("parsers.annotations")


@dataclass(frozen=True)
class MethodHeader:
    """Name and raw parameter list of a ``public void`` method declaration."""

    name: str
    parameters: str


def find_method_after(text: str, offset: int) -> Optional[MethodHeader]:
    """Return the first method header found anywhere after ``offset``.

    The search distance is unbounded: stacked annotations share the method that
    follows them, and an annotation with no method of its own binds to whatever
    header comes next in the file.
    """
    match = METHOD_PATTERN.search(text, offset)
    if match is None:
        return None
    return MethodHeader(name=match.group(1), parameters=match.group(2).strip())


def line_number_at(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def contains_step_annotations(text: str) -> bool:
    """Cheap pre-filter: True when any category annotation occurs in ``text``."""
    return any(pattern.search(text) for pattern in ANNOTATION_PATTERNS.values())


def extract_imports(text: str) -> Set[str]:
    return {match.group(1) for match in IMPORT_PATTERN.finditer(text)}


def read_source(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


class AnnotationParser:
    """Finds step annotations and binds each to the method declared after it."""

    def __init__(self, classifier: ParameterClassifier | None = None) -> None:
        self.classifier = classifier or ParameterClassifier()

    def parse_file(self, path: Path) -> List[StepDefinition]:
        return self.parse_text(read_source(path), path.stem)

    def file_contains_step_annotations(self, path: Path) -> bool:
        return contains_step_annotations(read_source(path))

    def parse_text(self, text: str, class_name: str | None = None) -> List[StepDefinition]:
        """Return every step occurrence in ``text``.

        Categories are processed in GIVEN, WHEN, THEN order and each category
        yields its matches in source order. Annotations with no following method
        header are dropped.
        """
        steps: List[StepDefinition] = []
        for category, pattern in ANNOTATION_PATTERNS.items():
            steps.extend(self._extract_category(text, class_name, category, pattern))
        return steps

    def _extract_category(
        self,
        text: str,
        class_name: str | None,
        category: StepCategory,
        pattern: Pattern[str],
    ) -> List[StepDefinition]:
        steps: List[StepDefinition] = []
        for match in pattern.finditer(text):
            step_text = match.group(1)
            method = find_method_after(text, match.end())
            if method is None:
                _logger.debug(
                    "Skipping @%s(\"%s\") in %s: no method follows",
                    category.marker,
                    step_text,
                    class_name or "<text>",
                )
                continue
            step = StepDefinition(
                category=category,
                pattern=step_text,
                method_name=method.name,
                class_name=class_name,
                line_number=line_number_at(text, match.start()),
            )
            step.parameters = self.classifier.classify(method.parameters, step_text)
            steps.append(step)
        return steps


__all__ = [
    "ANNOTATION_PATTERNS",
    "AnnotationParser",
    "METHOD_PATTERN",
    "MethodHeader",
    "contains_step_annotations",
    "extract_imports",
    "find_method_after",
    "line_number_at",
    "read_source",
]
