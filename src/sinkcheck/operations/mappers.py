"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and CLI command wrappers
to ensure consistent error handling across all Typer commands.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

EXIT_CODES = {
    "ConfigurationInvalid": 1,
    "ValidationError": 2,
    "ValueError": 2,
    "FileNotFoundError": 2,
    "StorageAccessError": 3,
    "StorageAuthError": 4,
}

def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to standardized exit code.

    Returns:
    - 0: Success (never returned here)
    - 1: Configuration has violations (ConfigurationInvalid)
    - 2: Configuration could not be loaded or parsed
    - 3: Storage unreachable (StorageAccessError) or unknown error
    - 4: Storage credentials missing or rejected (StorageAuthError)

    Args:
        exc: Exception to map

    Returns:
        Exit code, with 3 as fallback for unknown exceptions
    """
    return EXIT_CODES.get(type(exc).__name__, 3)

def run_and_exit(func: Callable[[], T]) -> T:
    """
    Unified error wrapper for CLI commands.

    Executes the given function and maps any exceptions to appropriate
    exit codes using typer.Exit. Violations are already printed by the
    command; every other error is reported on stderr.

    Args:
        func: Function to execute

    Returns:
        Function result if successful

    Raises:
        typer.Exit: With appropriate exit code if function raises exception
    """
    try:
        return func()
    except Exception as e:
        if type(e).__name__ != "ConfigurationInvalid":
            from .printers import print_error
            print_error(e)
        raise typer.Exit(code=exit_code_for(e)) from e
