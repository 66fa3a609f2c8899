"""
Validation utilities for decoded tables.

Checks the shape guarantees of materialized tables and reports data
quality issues gathered during decoding.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from fittables.workflow import DecodeResult, MaterializedTable

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """A single validation issue."""

    field: str
    message: str
    severity: str  # "error", "warning", "info"
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Result of validating decoded tables."""

    is_valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == "warning"]

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="error", value=value)
        )
        self.is_valid = False

    def add_warning(self, field: str, message: str, value: Any = None) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="warning", value=value)
        )

    def add_info(self, field: str, message: str, value: Any = None) -> None:
        """Add an info issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="info", value=value)
        )


class TableValidator:
    """
    Validates a DecodeResult.

    Checks:
    1. Every column of a table has exactly row_count entries
    2. There is exactly one unit string per column
    3. Decode warnings (unrecognized types, unit conflicts) are carried over

    Usage:
        validator = TableValidator()
        result = validator.validate(decode_result)

        if not result.is_valid:
            for issue in result.errors:
                print(f"ERROR: {issue.field}: {issue.message}")
    """

    def __init__(self, report_empty: bool = True):
        """
        Initialize the validator.

        Args:
            report_empty: Add info issues for tables without columns
        """
        self.report_empty = report_empty

    def validate(self, decoded: DecodeResult) -> ValidationResult:
        """
        Validate every table of a decode result.

        Args:
            decoded: The decode result to validate

        Returns:
            ValidationResult with issues found
        """
        result = ValidationResult(is_valid=True)

        for name, table in decoded.tables.items():
            self._validate_table(name, table, result)

        for warning in decoded.warnings:
            result.add_warning("decode", warning)

        if not result.is_valid:
            logger.debug(f"Validation found {len(result.errors)} error(s)")
        return result

    def _validate_table(self, name: str, table: MaterializedTable, result: ValidationResult) -> None:
        if table.row_count < 0:
            result.add_error(name, "Negative row count", table.row_count)

        for column, values in table.columns.items():
            if len(values) != table.row_count:
                result.add_error(
                    f"{name}.{column}",
                    f"Column has {len(values)} values, table has {table.row_count} rows",
                    len(values),
                )

        if len(table.units) != len(table.columns):
            result.add_error(
                name,
                f"{len(table.units)} units for {len(table.columns)} columns",
                len(table.units),
            )

        if self.report_empty and not table.columns:
            result.add_info(name, f"Table has {table.row_count} row(s) but no columns")
