"""Custom exceptions for Caselib Bundle."""

from typing import Optional


class BundleError(Exception):
    """Base exception for bundle assembly errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class BundleValidationError(BundleError):
    """Raised when an export request cannot produce a bundle."""

    pass


class DocumentImportError(BundleError):
    """Raised when a source document cannot be parsed as PDF."""

    def __init__(self, message: str, filename: str = "", details: Optional[str] = None):
        super().__init__(message, details)
        self.filename = filename


class RenderingError(BundleError):
    """Exception raised while drawing a synthetic page."""

    pass


class FontError(BundleError):
    """Exception raised when glyph data cannot be loaded."""

    pass


class AssetError(BundleError):
    """Exception raised for logo or stamp assets that cannot be used."""

    pass


class ProjectError(BundleError):
    """Exception raised while reading or writing a project file."""

    pass
