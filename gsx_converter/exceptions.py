"""
Fatal conversion errors.

Parsing anomalies never raise; they are recovered where they happen. Only
file resolution, format selection and an inconsistent model stop a run.
Each error carries the process exit code the command line reports for it.
"""

from typing import Optional

from .models.validation import ValidationResult


class ConversionError(Exception):
    """Base class for errors that abort a conversion."""

    exit_code = 3


class MissingInputFileError(ConversionError):
    """The input file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Input file not found: {path}")
        self.path = path


class UnsupportedExtensionError(ConversionError):
    """The input extension selects no known grammar."""

    exit_code = 4

    def __init__(self, extension: str, supported: Optional[list] = None):
        message = f"Unsupported file format: {extension or '(none)'}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)
        self.extension = extension


class MissingBaseForOverrideError(ConversionError):
    """An override file was given without the section file it overrides."""

    exit_code = 5

    def __init__(self, expected_path: str):
        super().__init__(f"Missing base file required for override: {expected_path}")
        self.expected_path = expected_path


class SerializationError(ConversionError):
    """The in-memory configuration is inconsistent and cannot be written."""

    def __init__(self, message: str, validation_result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.validation_result = validation_result

    def __str__(self) -> str:
        if self.validation_result:
            error_messages = "\n  - ".join(self.validation_result.get_error_messages())
            return f"{super().__str__()}\nErrors:\n  - {error_messages}"
        return super().__str__()
