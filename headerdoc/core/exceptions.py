"""
Centralized Exception Hierarchy for headerdoc.

All exceptions inherit from HeaderDocError so callers can catch any
headerdoc-specific failure in one place.

Each exception carries:
- error_code: Unique identifier (e.g., "HD-PARSE-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Exception Hierarchy
-------------------
    HeaderDocError (base)
    ├── ProcessingError
    │   ├── SourceReadError
    │   └── UnparseableUnitError
    ├── DependencyError
    │   └── ProviderUnavailableError
    └── ValidationError
        └── ConfigValidationError

Heuristic misses (no comment found, empty signature) are not errors and
never raise. A declaration whose parent is missing from the tree is dropped
and logged by the tree builder rather than raised.
"""

import builtins
from typing import Any, List, Optional


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Follows nested __cause__ and __context__ attributes to find
    the original error that started the chain.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        # Prefer explicit cause over implicit context
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class HeaderDocError(Exception):
    """
    Base exception for all headerdoc errors.

    Example
    -------
        try:
            build_unit(path, config)
        except HeaderDocError as e:
            logger.error(f"Build failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses should override
    error_code: str = "HD-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize HeaderDocError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "HD-PARSE-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(message)

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix



# ============================================================================
# Processing Exceptions
# ============================================================================


class ProcessingError(HeaderDocError):
    """
    Base exception for failures while documenting one input unit.

    A processing error fails that unit only; the remaining units are
    still processed.
    """

    error_code = "HD-PROC-000"
    why_it_happened = "Documenting the input file failed at some stage"
    how_to_fix = [
        "Check that the file is a C or C++ header",
        "Run with --verbose to see which stage failed",
    ]


class SourceReadError(ProcessingError):
    """Raised when the input file cannot be read or decoded."""

    error_code = "HD-PROC-001"
    why_it_happened = (
        "The input file could not be read. It may be missing, unreadable "
        "or not valid UTF-8 text"
    )
    how_to_fix = [
        "Check that the path is correct and the file is readable",
        "Convert the file to UTF-8",
    ]


class UnparseableUnitError(ProcessingError):
    """
    Raised when the AST provider cannot produce a syntax tree for a unit.

    Example
    -------
        ClangProvider().parse(Path("broken.h"), lines)
        # Raises: UnparseableUnitError("could not parse c++ source file: broken.h")
    """

    error_code = "HD-PARSE-001"
    why_it_happened = (
        "The parser could not build a syntax tree for this file. It may not "
        "be C/C++ source or the parser rejected its arguments"
    )
    how_to_fix = [
        "Check that the file is a C or C++ header",
        "Pass extra compiler flags with parser.clang_args in headerdoc.yaml",
        "Try the other parser with --provider tree-sitter",
    ]


# ============================================================================
# Dependency Exceptions
# ============================================================================


class DependencyError(HeaderDocError):
    """
    Raised when a required dependency is missing.

    Used for the optional parser backends.
    """

    error_code = "HD-DEP-001"
    why_it_happened = (
        "A required Python package is not installed. "
        "Each parser backend needs its own package"
    )
    how_to_fix = [
        "Install the missing package with pip install <package>",
        "For the clang parser: pip install libclang",
        "For the tree-sitter parser: pip install 'headerdoc[treesitter]'",
    ]


class ProviderUnavailableError(DependencyError):
    """Raised when the selected AST provider cannot be loaded."""

    error_code = "HD-DEP-002"
    why_it_happened = (
        "The selected parser backend could not be loaded. Its Python package "
        "or its native library is missing"
    )
    how_to_fix = [
        "For the clang parser: pip install libclang, or set HEADERDOC_LIBCLANG "
        "to the path of libclang.so",
        "For the tree-sitter parser: pip install 'headerdoc[treesitter]'",
        "Select another parser with --provider",
    ]


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(HeaderDocError):
    """Raised when input data or configuration fails validation."""

    error_code = "HD-VAL-000"
    why_it_happened = "Validation failed for input data or configuration"
    how_to_fix = [
        "Check the error message for specific validation failures",
        "Review the expected format or value constraints",
    ]


class ConfigValidationError(ValidationError):
    """
    Raised when configuration validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "HD-VAL-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "The headerdoc.yaml file may have incorrect settings"
    )
    how_to_fix = [
        "Check headerdoc.yaml for syntax errors",
        "Verify the value type matches what's expected",
        "Remove the setting to fall back to its default",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


# ============================================================================
# Error Info Lookup
# ============================================================================


# Mapping from standard exceptions to helpful error info
STANDARD_ERROR_INFO: dict[type, dict[str, Any]] = {
    builtins.FileNotFoundError: {
        "error_code": "HD-FILE-001",
        "why_it_happened": "The specified file or directory could not be found",
        "how_to_fix": [
            "Check that the file path is correct",
            "Ensure you have read permissions for the file",
        ],
    },
    builtins.PermissionError: {
        "error_code": "HD-FILE-002",
        "why_it_happened": "You don't have permission to access this file or directory",
        "how_to_fix": [
            "Check file permissions: ls -la <file>",
            "Choose an output directory you can write to",
        ],
    },
    ModuleNotFoundError: {
        "error_code": "HD-DEP-001",
        "why_it_happened": "A required Python package is not installed",
        "how_to_fix": ["Install the missing package: pip install <package-name>"],
    },
    ValueError: {
        "error_code": "HD-VAL-002",
        "why_it_happened": "An invalid value was provided",
        "how_to_fix": [
            "Check the error message for the expected value format",
            "Verify your input matches the required type",
        ],
    },
    OSError: {
        "error_code": "HD-SYS-001",
        "why_it_happened": "A system-level error occurred",
        "how_to_fix": [
            "Check disk space and permissions",
            "Review system logs for more details",
        ],
    },
}


def get_error_info(exc: BaseException) -> dict[str, Any]:
    """Get helpful error information for any exception.

    Looks up the exception type in STANDARD_ERROR_INFO or extracts
    info from HeaderDocError subclasses.

    Args:
        exc: Exception to get info for

    Returns:
        Dict with error_code, why_it_happened, how_to_fix
    """
    if isinstance(exc, HeaderDocError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    exc_type = type(exc)
    if exc_type in STANDARD_ERROR_INFO:
        return STANDARD_ERROR_INFO[exc_type]

    for parent_type, info in STANDARD_ERROR_INFO.items():
        if isinstance(exc, parent_type):
            return info

    return {
        "error_code": "HD-ERR-999",
        "why_it_happened": "An unexpected error occurred",
        "how_to_fix": [
            "Check the error message for details",
            "Run again with --verbose for a full traceback",
        ],
    }
