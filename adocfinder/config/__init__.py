# adocfinder/config/__init__.py
"""
Configuration for adocfinder: the run settings dataclass and the TOML
file loader that layers user, project and profile settings.
"""
from .settings import FinderConfig, SortMethod, OutputFormat, DEFAULT_SOURCE_DOCUMENT_EXTENSIONS

__all__ = ["FinderConfig", "SortMethod", "OutputFormat", "DEFAULT_SOURCE_DOCUMENT_EXTENSIONS"]
