"""
Schema validation for CV config files.

The renderer itself only needs a non-blank ``personal.name``; this module
adds a JSON Schema check for the ``validate`` command so typos (unknown
keys, wrong types) are reported before a build.
"""

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

from .model import validate_config

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schemas" / "cv.schema.json"


@dataclass
class ValidationIssue:
    """Represents a single validation issue."""

    path: str
    message: str
    severity: str = "error"  # "error" or "warning"

    def __str__(self) -> str:
        severity_icon = "❌" if self.severity == "error" else "⚠️"
        return f"{severity_icon} {self.path}: {self.message}"


@dataclass
class ValidationReport:
    """Result of validating a CV config file."""

    file_path: Optional[Path] = None
    is_valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add an issue to the report."""
        self.issues.append(issue)
        if issue.severity == "error":
            self.error_count += 1
            self.is_valid = False
        else:
            self.warning_count += 1

    def format_text(self) -> str:
        """Format the report as human-readable text."""
        lines = []
        if self.file_path:
            lines.append(f"Validation report for: {self.file_path}")

        if self.is_valid and not self.issues:
            lines.append("✅ No issues found")
        else:
            status = "❌ INVALID" if not self.is_valid else "⚠️ WARNINGS"
            lines.append(f"Status: {status}")
            lines.append(f"Errors: {self.error_count}, Warnings: {self.warning_count}")
            for issue in self.issues:
                lines.append(f"  {issue}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file": str(self.file_path) if self.file_path else None,
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "issues": [
                {"path": i.path, "message": i.message, "severity": i.severity}
                for i in self.issues
            ],
        }


@lru_cache(maxsize=None)
def load_schema() -> Dict[str, Any]:
    """Load the bundled CV config JSON schema."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _format_json_path(path: List[Any]) -> str:
    """
    Format a JSON path for display, e.g. ``$.sections.experience[0].role``.
    """
    parts = ["$"]
    for component in path:
        if isinstance(component, int):
            parts.append(f"[{component}]")
        else:
            parts.append(f".{component}")
    return "".join(parts)


def validate_cv_json(
    data: Any,
    strict: bool = False,
    file_path: Optional[Path] = None,
) -> ValidationReport:
    """
    Validate CV config data.

    Args:
        data: The parsed JSON.
        strict: If True, every schema issue is an error. Otherwise only
                missing required keys and type mismatches are.
        file_path: Optional path to the source file (for reporting).

    Returns:
        ValidationReport containing all issues found.
    """
    report = ValidationReport(file_path=file_path)

    if not validate_config(data):
        report.add_issue(ValidationIssue(
            path="$.personal.name",
            message="required and must be a non-blank string",
        ))

    validator = Draft7Validator(load_schema())

    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    for error in errors:
        path = _format_json_path(list(error.absolute_path))
        # personal.name problems are already reported by the gate check above
        if path == "$.personal.name" or (
            error.validator == "required" and "'name'" in error.message
        ):
            continue
        if path == "$" and error.validator in ("required", "type") and not report.is_valid:
            continue

        if strict or error.validator in ("required", "type"):
            severity = "error"
        else:
            severity = "warning"

        report.add_issue(ValidationIssue(path=path, message=error.message, severity=severity))

    return report


def validate_cv_file(file_path: Path, strict: bool = False) -> ValidationReport:
    """
    Validate a CV config file.

    Never raises: unreadable files and bad JSON are reported as issues.
    """
    report = ValidationReport(file_path=file_path)

    if not file_path.exists():
        report.add_issue(ValidationIssue(path="$", message=f"File not found: {file_path}"))
        return report

    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        report.add_issue(ValidationIssue(path="$", message=f"Invalid JSON: {e}"))
        return report
    except (OSError, UnicodeDecodeError) as e:
        report.add_issue(ValidationIssue(path="$", message=f"Error reading file: {e}"))
        return report

    return validate_cv_json(data, strict=strict, file_path=file_path)
