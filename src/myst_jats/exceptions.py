#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the myst_jats library.

This module defines specialized exception classes for the error conditions
that can occur while loading a document tree and writing it out as JATS.
Malformed document *content* never raises: it is reported through
:mod:`myst_jats.diagnostics` instead. The exceptions below signal programming
or configuration errors, which are allowed to propagate.

Exception Hierarchy
-------------------
- MystJatsError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class)

  - FileError (file access and I/O)

  - ParsingError (document tree loading failures)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

"""

from typing import Any


class MystJatsError(Exception):
    """Base exception class for all myst_jats-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MystJatsError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MystJatsError):
    """Exception raised for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ParsingError(MystJatsError):
    """Exception raised when a serialized document tree cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of loading where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(MystJatsError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing output file fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


__all__ = [
    "MystJatsError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
]
