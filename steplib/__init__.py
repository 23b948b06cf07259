"""Extract Cucumber step definitions from Java sources into a YAML step library."""

__version__ = "0.1.0"
