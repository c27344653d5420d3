# adocfinder/core/discovery/__init__.py
"""
Source document discovery for adocfinder.

This package walks a source directory and picks out the documents to
build, skipping underscore-prefixed (hidden) files and directories.
"""
from .walker import SourceDocumentFinder, find_source_documents

__all__ = ["SourceDocumentFinder", "find_source_documents"]
