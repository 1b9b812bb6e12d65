"""
Custom exception hierarchy for rustydeps.

Every error raised on purpose by rustydeps derives from
:class:`RustyDepsError`. Subclasses attach structured metadata through the
``details`` mapping, which is appended to the message when the error is
printed and kept intact for debug logging.

Hierarchy::

    RustyDepsError
    ├── ConfigError
    ├── ManifestError
    ├── VersionParseError
    ├── NetworkError
    │   └── RegistryError
    │       ├── PackageNotFoundError
    │       └── RegistryParseError
    ├── FileOperationError
    └── UpdateExecutionError
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Sequence


class RustyDepsError(Exception):
    """Base exception for all rustydeps errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ConfigError(RustyDepsError):
    """Raised when a configuration file is missing, unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class ManifestError(RustyDepsError):
    """Raised when ``Cargo.toml`` cannot be read or has an unexpected shape.

    Args:
        message: Error description.
        file_path: Path to the manifest.
        dependency: Name of the dependency entry that was rejected.
    """

    __slots__ = ("file_path", "dependency")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        dependency: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", file_path)
        _add_if(details, "dependency", dependency)

        super().__init__(message, details)

        self.file_path = file_path
        self.dependency = dependency


class VersionParseError(RustyDepsError):
    """Raised when text is not a valid semantic version.

    Args:
        message: Error description.
        version: The text that failed to parse.
    """

    __slots__ = ("version",)

    def __init__(self, message: str, *, version: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "version", version)

        super().__init__(message, details)

        self.version = version


class NetworkError(RustyDepsError):
    """Raised when HTTP or network operations fail.

    Args:
        message: Error description.
        url: URL being accessed.
        status_code: HTTP status code, if available.
        response_body: Raw response body, truncated for safety.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "url", url)
        _add_if(details, "status_code", status_code)

        if response_body is not None:
            details["response"] = _truncate(response_body)

        super().__init__(message, details)

        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class RegistryError(NetworkError):
    """Raised when the latest version of a crate cannot be obtained.

    Args:
        message: Error description.
        package_name: Name of the crate involved.
        **kwargs: Additional arguments forwarded to ``NetworkError``.
    """

    __slots__ = ("package_name",)

    def __init__(
        self,
        message: str,
        *,
        package_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)

        self.package_name = package_name
        if package_name is not None:
            self.details["package"] = package_name


class PackageNotFoundError(RegistryError):
    """Raised when the registry has no entry for a crate."""


class RegistryParseError(RegistryError):
    """Raised when a registry response is malformed or has no usable version."""


class FileOperationError(RustyDepsError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (backup/restore/remove).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class UpdateExecutionError(RustyDepsError):
    """Raised when the external ``cargo add`` invocation fails.

    Args:
        message: Error description.
        command: The command line that was executed.
        returncode: Exit status of the process, if it ran at all.
        stderr: Captured standard error, truncated for safety.
    """

    __slots__ = ("command", "returncode", "stderr")

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", " ".join(command) if command else None)
        _add_if(details, "returncode", returncode)

        if stderr:
            details["stderr"] = _truncate(stderr.strip())

        super().__init__(message, details)

        self.command = list(command) if command else None
        self.returncode = returncode
        self.stderr = stderr
