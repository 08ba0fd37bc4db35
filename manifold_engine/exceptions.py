"""
Custom exceptions for MANIFOLD_ENGINE.

These exceptions provide more specific error types while maintaining
backward compatibility with RuntimeError.
"""

from typing import Any, Dict, Optional


class ManifoldEngineError(RuntimeError):
    """
    Base exception for Manifold Engine errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (manifest_format,
                 platform_id, location, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ManifestContentError(ManifoldEngineError):
    """
    Raised when a manifest has no content or its content is not a JSON object.

    Structural error: never retried.
    """


class ManifestFormatError(ManifoldEngineError):
    """
    Raised when a manifest format is not recognized or not the one required
    by an operation.

    Attributes:
        message: Error message
        manifest_format: Offending format identifier (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        manifest_format: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if manifest_format:
            context["manifest_format"] = manifest_format
        super().__init__(message, context=context)
        self.manifest_format = manifest_format


class ManifestConversionError(ManifoldEngineError):
    """Raised when a manifest cannot be expressed in the requested format."""


class RuleLoadError(ManifoldEngineError):
    """
    Raised when a validation rule location cannot be read at all.

    Failures of individual rule files are logged and skipped by the loader;
    only an unreadable location surfaces as this exception.

    Attributes:
        message: Error message
        location: Rule file or directory (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        location: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if location:
            context["location"] = location
        super().__init__(message, context=context)
        self.location = location


class StartUrlError(ManifoldEngineError):
    """Raised when a start URL or site URL is not a valid URL."""


class DomainMismatchError(StartUrlError):
    """
    Raised when the manifest's start_url points outside the hosted site's domain.

    Attributes:
        message: Error message naming both hostnames
        site_hostname: Hostname of the hosted site
        start_hostname: Hostname of the resolved start_url
    """

    def __init__(
        self,
        message: str,
        site_hostname: Optional[str] = None,
        start_hostname: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.site_hostname = site_hostname
        self.start_hostname = start_hostname


class PlatformError(ManifoldEngineError):
    """
    Raised when a platform is not registered or its module cannot be loaded.

    Attributes:
        message: Error message
        platform_id: Platform identifier (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        platform_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if platform_id:
            context["platform_id"] = platform_id
        super().__init__(message, context=context)
        self.platform_id = platform_id

