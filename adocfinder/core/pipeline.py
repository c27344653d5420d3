# adocfinder/core/pipeline.py
import json
from pathlib import Path
from typing import List, Dict, Any

import structlog

from adocfinder.config.settings import FinderConfig, OutputFormat, SortMethod
from adocfinder.core.discovery.walker import SourceDocumentFinder

log = structlog.get_logger(__name__)


class SourceDocumentCollector:
    # resolves a FinderConfig into the list of documents a build would convert.
    def __init__(self, config: FinderConfig):
        self.config: FinderConfig = config
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.documents: List[Path] = []

    def _collect_single_document(self) -> List[Path]:
        candidate = self.config.source_directory / self.config.source_document_name
        try:
            is_file = candidate.is_file()
        except OSError as e:
            self.log.warning("source_document_not_accessible", path=str(candidate), error=str(e))
            return []
        if is_file:
            self.log.info("single_source_document_selected", path=str(candidate))
            return [candidate]
        self.log.warning("source_document_name_not_found", path=str(candidate))
        return []

    def _sort_documents(self, documents: List[Path]) -> List[Path]:
        method = self.config.sort_method
        if method == SortMethod.TRAVERSAL:
            return documents
        return sorted(
            documents,
            key=lambda p: relative_display_path(p, self.config.source_directory),
            reverse=(method == SortMethod.NAME_DESC),
        )

    def collect(self) -> List[Path]:
        self.log.info("collecting_source_documents", source_directory=str(self.config.source_directory))
        if self.config.source_document_name:
            documents = self._collect_single_document()
        else:
            finder = SourceDocumentFinder(
                exclude_patterns=self.config.exclude_patterns,
                follow_symlinks=self.config.follow_symlinks,
            )
            documents = finder.find(self.config.source_directory, self.config.source_document_extensions)

        self.documents = self._sort_documents(documents)
        self.log.info("source_documents_collected", count=len(self.documents))
        return self.documents


def relative_display_path(document: Path, source_directory: Path) -> str:
    try:
        return document.relative_to(source_directory).as_posix()
    except ValueError:
        return document.as_posix()


def render_document_list(documents: List[Path], config: FinderConfig) -> str:
    # renders the collected documents as plain text lines or a json payload.
    if config.absolute_paths:
        shown = [str(doc.resolve()) for doc in documents]
    else:
        shown = [relative_display_path(doc, config.source_directory) for doc in documents]

    if config.output_format == OutputFormat.JSON:
        payload: Dict[str, Any] = {
            "source_directory": str(config.source_directory),
            "extensions": list(config.source_document_extensions),
            "documents": shown,
            "count": len(shown),
        }
        return json.dumps(payload, indent=2) + "\n"

    if not shown:
        return ""
    return "\n".join(shown) + "\n"
