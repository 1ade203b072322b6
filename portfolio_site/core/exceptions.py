"""
Custom exception classes for the portfolio site builder.
"""
from typing import Optional


class PortfolioSiteError(Exception):
    """
    Base class for all custom exceptions in the portfolio site builder.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration Related Exceptions ---
class ConfigurationError(PortfolioSiteError):
    """
    Raised for errors related to application configuration.
    This could include issues with loading, accessing, or validating configuration data.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Content Loading Exceptions ---
class LoadError(PortfolioSiteError):
    """
    Raised when the content document cannot be fetched or does not have the
    expected top-level structure.

    Attributes:
        source (Optional[str]): The URL or path the document was loaded from.
        original_exception (Optional[Exception]): The underlying error, if any.
    """
    def __init__(self, message: str, source: Optional[str] = None, original_exception: Optional[Exception] = None):
        self.source = source
        self.original_exception = original_exception
        full_message = message
        if original_exception:
            full_message += f" (Original exception: {str(original_exception)})"
        super().__init__(full_message)


# --- Orchestration Exceptions ---
class OrchestrationError(PortfolioSiteError):
    """
    Raised when the site manager is driven through an illegal state transition,
    e.g. loading content twice or rendering before the content is ready.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(PortfolioSiteError):
    """
    A general base class for errors originating from within a specific component
    (e.g., Renderer, Storage, Skills, Mapping).

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """Raised for errors specific to the Renderer component (e.g., page parsing, node building)."""
    def __init__(self, message: str):
        super().__init__(component_name="Renderer", message=message)


class StorageError(ComponentError):
    """Raised for errors specific to the Storage component (e.g., file system operations)."""
    def __init__(self, message: str):
        super().__init__(component_name="Storage", message=message)


class SkillsError(ComponentError):
    """Raised when the language statistics cannot be loaded or have an unexpected shape."""
    def __init__(self, message: str):
        super().__init__(component_name="Skills", message=message)


class MapKeyUnavailableError(ComponentError):
    """Raised when no provider in the map-key chain yields a usable subscription key."""
    def __init__(self, message: str):
        super().__init__(component_name="Mapping", message=message)


# --- Section Rendering Exceptions ---
# These are recoverable: the site manager skips the affected section and
# keeps rendering the others.
class SectionError(RendererError):
    """
    Base class for per-section rendering failures.

    Attributes:
        section (str): The content key of the section that failed (e.g. "whoAmI").
    """
    def __init__(self, section: str, message: str):
        self.section = section
        super().__init__(f"[{section}] {message}")


class MissingDataError(SectionError):
    """Raised when a section's data key is absent from an otherwise valid document."""
    def __init__(self, section: str):
        super().__init__(section, f"No '{section}' data found in the content document.")


class MissingContainerError(SectionError):
    """
    Raised when the mount point for a section is not present in the page.

    Attributes:
        selectors (tuple): The selectors that were tried, in order.
    """
    def __init__(self, section: str, selectors):
        self.selectors = tuple(selectors)
        super().__init__(section, f"Container not found (tried: {', '.join(self.selectors)}).")


class InvalidSectionDataError(SectionError):
    """Raised when a section's data is present but does not match the expected shape."""
    def __init__(self, section: str, message: str):
        super().__init__(section, f"Invalid section data: {message}")
