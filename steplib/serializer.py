"""Render a StepLibrary as the step library YAML document.

The layout is fixed so downstream tooling can rely on key order and quoting;
the text is assembled by hand rather than through a YAML emitter.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from .config import DEFAULT_OUTPUT_FILE
from .errors import WriteError
from .library import StepLibrary
from .logging import get_logger
from .models import StepCategory

HEADER_LINES: tuple[str, ...] = (
    "# Generated Cucumber step library from Java source files",
    "# This file is compatible with the HLR-to-Test CLI tool",
)

_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)

_logger = get_logger("serializer")


def escape_yaml_string(value: str | None) -> str:
    """Escape for a double-quoted scalar; backslashes go first."""
    if value is None:
        return ""
    for raw, escaped in _ESCAPES:
        value = value.replace(raw, escaped)
    return value


def _quoted(value: str) -> str:
    return f'"{escape_yaml_string(value)}"'


def _render_step_block(lines: List[str], key: str, steps: Sequence[str]) -> None:
    lines.append(f"{key}:")
    if not steps:
        lines.append("  []")
    else:
        lines.extend(f"  - {_quoted(step)}" for step in steps)
    lines.append("")


def _render_parameter_types(lines: List[str], parameter_types: Mapping[str, str]) -> None:
    lines.append("parameter_types:")
    for type_name, description in parameter_types.items():
        lines.append(f"  {type_name}: {_quoted(description)}")
    lines.append("")


def _render_metadata(lines: List[str], metadata: Mapping[str, Any]) -> None:
    lines.append("metadata:")
    for key, value in metadata.items():
        if isinstance(value, list):
            if not value:
                lines.append(f"  {key}: []")
                continue
            lines.append(f"  {key}:")
            lines.extend(f"    - {_quoted(str(item))}" for item in value)
        elif isinstance(value, str):
            lines.append(f"  {key}: {_quoted(value)}")
        else:
            lines.append(f"  {key}: {value}")


def generate_yaml(library: StepLibrary) -> str:
    lines: List[str] = [*HEADER_LINES, ""]
    for category in StepCategory:
        _render_step_block(lines, category.block_key, library.steps_for(category))
    if library.parameter_types:
        _render_parameter_types(lines, library.parameter_types)
    _render_metadata(lines, library.metadata)
    return "\n".join(lines) + "\n"


def generate_minimal_yaml(library: StepLibrary) -> str:
    """Only the three step blocks, without header, parameter docs or metadata."""
    lines: List[str] = []
    for category in StepCategory:
        lines.append(f"{category.block_key}:")
        steps = library.steps_for(category)
        if not steps:
            lines.append("  []")
        else:
            lines.extend(f"  - {_quoted(step)}" for step in steps)
    return "\n".join(lines) + "\n"


def write_to_file(
    library: StepLibrary, output_path: str | os.PathLike[str] = DEFAULT_OUTPUT_FILE
) -> Path:
    """Write the document, creating missing parent directories first."""
    content = generate_yaml(library)
    target = Path(output_path)

    parent = target.parent
    if not parent.exists():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Failed to create parent directories for: {output_path}") from exc

    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Failed to write step library to {output_path}: {exc}") from exc
    _logger.debug("Wrote %d bytes to %s", len(content.encode("utf-8")), target)
    return target


def validate_step_library(library: StepLibrary | None) -> bool:
    """True when there is a library holding at least one step worth writing."""
    if library is None:
        _logger.debug("Step library is missing")
        return False
    if library.is_empty():
        _logger.debug("Step library contains no steps")
        return False
    return True


def generation_stats(library: StepLibrary) -> Dict[str, int]:
    return {
        "given_steps": len(library.given_steps),
        "when_steps": len(library.when_steps),
        "then_steps": len(library.then_steps),
        "total_steps": library.total_step_count(),
        "parameter_types": len(library.parameter_types),
        "source_files": len(library.source_files),
    }


def log_generation_stats(library: StepLibrary) -> None:
    stats = generation_stats(library)
    _logger.info("YAML generation statistics:")
    for key, value in stats.items():
        _logger.info("  %s: %d", key.replace("_", " ").capitalize(), value)


__all__ = [
    "HEADER_LINES",
    "escape_yaml_string",
    "generate_minimal_yaml",
    "generate_yaml",
    "generation_stats",
    "log_generation_stats",
    "validate_step_library",
    "write_to_file",
]
