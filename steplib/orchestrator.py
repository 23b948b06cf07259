"""Pipeline orchestration: scan, extract, aggregate, document and write."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_OUTPUT_FILE
from .library import Clock, StepLibrary
from .logging import get_logger
from .models import StepDefinition
from .parsers.annotations import (
    AnnotationParser,
    contains_step_annotations,
    extract_imports,
    read_source,
)
from .parsers.parameters import (
    ParameterClassifier,
    generate_parameter_documentation,
    validate_parameter_consistency,
)
from .path_filter import PathFilter
from .serializer import log_generation_stats, validate_step_library, write_to_file


@dataclass
class ExtractionOutcome:
    """Result of a full extraction run."""

    library: StepLibrary
    output_path: Optional[Path]
    files_scanned: int
    files_processed: int
    steps_extracted: int
    warnings: List[str] = field(default_factory=list)

    @property
    def written(self) -> bool:
        return self.output_path is not None


class Orchestrator:
    """Coordinates the extraction pipeline over one source tree."""

    def __init__(
        self,
        path_filter: PathFilter | None = None,
        parser: AnnotationParser | None = None,
        classifier: ParameterClassifier | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.path_filter = path_filter or PathFilter()
        self.classifier = classifier or ParameterClassifier()
        self.parser = parser or AnnotationParser(self.classifier)
        self._clock = clock
        self.logger = get_logger("orchestrator")

    def run(
        self,
        source: str | os.PathLike[str],
        output: str | os.PathLike[str] = DEFAULT_OUTPUT_FILE,
    ) -> ExtractionOutcome:
        """Extract steps under ``source`` and write the step library to ``output``."""
        self.logger.info("Starting step extraction")
        self.logger.info("Source folder: %s", source)
        self.logger.info("Output file: %s", output)

        scan = self.path_filter.scan_with_stats(source)
        self.logger.info(
            "Found %d %s files in %dms",
            scan.file_count,
            self.path_filter.extension,
            scan.scan_time_ms,
        )

        library = StepLibrary(clock=self._clock)
        if not scan.files:
            self.logger.info("No source files found. Exiting.")
            return ExtractionOutcome(
                library=library,
                output_path=None,
                files_scanned=0,
                files_processed=0,
                steps_extracted=0,
            )

        steps, processed = self._collect(scan.files, library)
        self.logger.info("Processed %d files with step definitions", processed)
        self.logger.info("Extracted %d total steps", len(steps))

        if not validate_step_library(library):
            self.logger.info("No step definitions found. Creating empty step library.")

        warnings = self._document(library, steps)

        written = write_to_file(library, output)
        self.logger.info("Extraction completed successfully")
        log_generation_stats(library)
        self.logger.info("Output written to: %s", written)

        return ExtractionOutcome(
            library=library,
            output_path=written,
            files_scanned=scan.file_count,
            files_processed=processed,
            steps_extracted=len(steps),
            warnings=warnings,
        )

    def extract_library(self, source: str | os.PathLike[str]) -> StepLibrary:
        """Build the step library for ``source`` without writing anything."""
        library = StepLibrary(clock=self._clock)
        steps, _ = self._collect(self.path_filter.scan_directory(source), library)
        self._document(library, steps)
        return library

    def extract_file(self, path: str | os.PathLike[str]) -> List[StepDefinition]:
        """Return the step definitions of one file, honouring the path filter."""
        steps: List[StepDefinition] = []
        for candidate in self.path_filter.scan_file(path):
            steps.extend(self.parser.parse_file(candidate))
        return steps

    def _collect(
        self, files: Sequence[Path], library: StepLibrary
    ) -> Tuple[List[StepDefinition], int]:
        collected: List[StepDefinition] = []
        processed = 0
        for path in files:
            try:
                text = read_source(path)
                if not contains_step_annotations(text):
                    continue
                self.logger.info("Processing: %s", path.name)
                imports = sorted(extract_imports(text))
                if imports:
                    self.logger.debug("Imports in %s: %s", path.name, ", ".join(imports))
                steps = self.parser.parse_text(text, path.stem)
                for step in steps:
                    library.add_step(step)
                library.add_source_file(path.name)
            except Exception as exc:
                self.logger.warning("Failed to process %s: %s", path.name, exc)
                continue
            collected.extend(steps)
            processed += 1
        return collected, processed

    def _document(self, library: StepLibrary, steps: Sequence[StepDefinition]) -> List[str]:
        if not steps:
            return []
        library.merge_parameter_types(generate_parameter_documentation(steps))
        warnings = validate_parameter_consistency(steps)
        if warnings:
            self.logger.warning("Parameter consistency warnings:")
            for warning in warnings:
                self.logger.warning("  - %s", warning)
        return warnings


__all__ = ["ExtractionOutcome", "Orchestrator"]
