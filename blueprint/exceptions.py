"""
Custom exception classes for the blueprint build tool.

This module defines custom exception classes for different types of errors.
"""

from typing import List, Optional, Sequence


class BlueprintError(Exception):
    """
    Base exception class for all blueprint-specific errors.
    """

    def __init__(self, message: str, exit_code: int = 1):
        """
        Initialize the exception.

        Args:
            message: Error message.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigurationError(BlueprintError):
    """
    Exception raised for configuration-related errors.
    """

    def __init__(
        self, message: str, config_file: Optional[str] = None, exit_code: int = 2
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            config_file: Path to the configuration file that caused the error.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.config_file = config_file
        if config_file:
            message = f"{message} (config file: {config_file})"
        super().__init__(message, exit_code)


class CompilerError(BlueprintError):
    """
    Exception raised when the external document compiler fails.
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        command: Optional[Sequence[str]] = None,
        stderr: str = "",
        exit_code: int = 3,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            returncode: Exit status reported by the compiler, if it ran.
            command: Command line that was executed.
            stderr: Diagnostics written by the compiler.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.returncode = returncode
        self.command: List[str] = list(command or [])
        self.stderr = stderr
        if returncode is not None:
            message = f"{message} (exit status: {returncode})"
        super().__init__(message, exit_code)


class MergeError(BlueprintError):
    """
    Exception raised when artifacts cannot be concatenated.
    """

    def __init__(
        self, message: str, output: Optional[str] = None, exit_code: int = 4
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            output: Path of the artifact the merge was supposed to produce.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.output = output
        if output:
            message = f"{message} (output: {output})"
        super().__init__(message, exit_code)


class MissingOptionalInput(BlueprintError):
    """
    Raised when an optional enrichment input (cover, table of contents) is unavailable.

    Enrichment steps catch it and report the artifact as unchanged.
    """

    def __init__(self, message: str, path: Optional[str] = None, exit_code: int = 5):
        self.path = path
        if path:
            message = f"{message} (path: {path})"
        super().__init__(message, exit_code)
