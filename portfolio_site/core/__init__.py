from .config import (
    ConfigurationManager,
    ConfigError,
    ConfigFileNotFoundError,
    InvalidYamlError,
    load_configuration,
)
from .exceptions import (
    PortfolioSiteError,
    ConfigurationError,
    LoadError,
    OrchestrationError,
    ComponentError,
    RendererError,
    StorageError,
    SkillsError,
    MapKeyUnavailableError,
    SectionError,
    MissingDataError,
    MissingContainerError,
    InvalidSectionDataError,
)
from .logger import setup_logging, get_logger

__all__ = [
    # Config
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    "load_configuration",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "PortfolioSiteError",
    "ConfigurationError",
    "LoadError",
    "OrchestrationError",
    "ComponentError",
    "RendererError",
    "StorageError",
    "SkillsError",
    "MapKeyUnavailableError",
    "SectionError",
    "MissingDataError",
    "MissingContainerError",
    "InvalidSectionDataError",
]
