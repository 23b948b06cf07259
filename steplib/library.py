"""Aggregated step library accumulated across all processed source files."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Mapping

from .models import StepCategory, StepDefinition
from .parsers.parameters import CUSTOM_TYPE_PREFIX

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with a trailing ``Z`` and second precision."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC).replace(tzinfo=None)
    return moment.isoformat(timespec="seconds") + "Z"


class StepLibrary:
    """Unique step patterns per category plus parameter docs and run metadata.

    Only pattern strings are retained; full StepDefinition objects stay with the
    caller. ``metadata["total_steps"]`` is recomputed after every mutation.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._steps: Dict[StepCategory, List[str]] = {category: [] for category in StepCategory}
        self.parameter_types: Dict[str, str] = {}
        self.metadata: Dict[str, Any] = {
            "extraction_date": format_timestamp((clock or _utc_now)()),
            "source_files": [],
            "total_steps": 0,
        }

    @property
    def given_steps(self) -> List[str]:
        return self._steps[StepCategory.GIVEN]

    @property
    def when_steps(self) -> List[str]:
        return self._steps[StepCategory.WHEN]

    @property
    def then_steps(self) -> List[str]:
        return self._steps[StepCategory.THEN]

    @property
    def source_files(self) -> List[str]:
        return self.metadata["source_files"]

    def steps_for(self, category: StepCategory) -> List[str]:
        return self._steps[category]

    def add_step(self, step: StepDefinition) -> None:
        patterns = self._steps[step.category]
        if step.pattern not in patterns:
            patterns.append(step.pattern)

        for param in step.parameters:
            if param.is_custom_type and param.java_type not in self.parameter_types:
                self.parameter_types[param.java_type] = f"{CUSTOM_TYPE_PREFIX}{param.java_type}"

        self._update_total_steps()

    def add_source_file(self, file_name: str) -> None:
        if file_name not in self.source_files:
            self.source_files.append(file_name)

    def merge_parameter_types(self, documentation: Mapping[str, str]) -> None:
        """Overlay documentation-pass descriptions on the per-step entries."""
        self.parameter_types.update(documentation)

    def total_step_count(self) -> int:
        return sum(len(patterns) for patterns in self._steps.values())

    def is_empty(self) -> bool:
        return self.total_step_count() == 0

    def _update_total_steps(self) -> None:
        self.metadata["total_steps"] = self.total_step_count()

    def __repr__(self) -> str:
        return (
            f"StepLibrary(given={len(self.given_steps)}, when={len(self.when_steps)}, "
            f"then={len(self.then_steps)}, parameter_types={len(self.parameter_types)})"
        )


__all__ = ["Clock", "StepLibrary", "format_timestamp"]
