# adocfinder/core/discovery/walker.py
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union
import structlog

from adocfinder.config.settings import DEFAULT_SOURCE_DOCUMENT_EXTENSIONS
from adocfinder.core.discovery.pattern_matching import (
    compile_glob_patterns_to_spec,
    has_source_extension,
    is_path_excluded,
    is_path_hidden,
)

log = structlog.get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class SourceDocumentFinder:
    """
    Walks a source directory and collects the documents whose names end in
    one of the accepted extensions.

    Files and directories whose name starts with an underscore are skipped,
    and hidden directories are pruned rather than walked. Only the path
    relative to the search root is inspected, so a root that itself lives
    under an `_enclosing` directory is still searched.

    The finder never raises for a missing root, an unreadable directory or
    an empty extension list; it just returns fewer (or no) documents.
    """

    def __init__(self, exclude_patterns: Optional[List[str]] = None, follow_symlinks: bool = False):
        self.exclude_patterns: List[str] = list(exclude_patterns or [])
        self.follow_symlinks = follow_symlinks
        self.exclude_spec = compile_glob_patterns_to_spec(self.exclude_patterns)

    def find(self, root: PathLike, extensions: Optional[Iterable[str]] = None) -> List[Path]:
        root_path = Path(root)
        if isinstance(extensions, str):
            extensions = [extensions]
        accepted = list(DEFAULT_SOURCE_DOCUMENT_EXTENSIONS if extensions is None else extensions)

        if not accepted:
            log.debug("no_source_extensions_configured", root=str(root_path))
            return []
        try:
            root_is_dir = root_path.is_dir()
        except OSError as e:
            log.warning("source_directory_not_accessible", root=str(root_path), error=str(e))
            return []
        if not root_is_dir:
            log.debug("source_directory_not_found", root=str(root_path))
            return []

        log.info("source_document_discovery_started", root=str(root_path), extensions=accepted)

        documents: List[Path] = []
        seen: Set[str] = set()
        visited_dirs: Set[str] = set()

        for dirpath, dirs, files in os.walk(
            root_path, topdown=True, onerror=self._on_walk_error, followlinks=self.follow_symlinks
        ):
            if self.follow_symlinks:
                real_dir = os.path.realpath(dirpath)
                if real_dir in visited_dirs:
                    dirs[:] = []
                    continue
                visited_dirs.add(real_dir)

            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root_path)

            # prune hidden and excluded directories before os.walk descends.
            dirs[:] = [d for d in dirs if self._is_traversable(rel_dir / d)]

            for file_name in files:
                rel_path = rel_dir / file_name
                if is_path_hidden(rel_path) or not has_source_extension(file_name, accepted):
                    continue
                if is_path_excluded(rel_path, self.exclude_spec):
                    log.debug("source_document_excluded", path=rel_path.as_posix())
                    continue

                file_path = current_dir / file_name
                try:
                    if not file_path.is_file():
                        continue
                except OSError as e:
                    log.warning("source_document_stat_error", path=str(file_path), error=str(e))
                    continue

                key = os.path.realpath(file_path) if self.follow_symlinks else str(file_path)
                if key in seen:
                    continue
                seen.add(key)
                documents.append(file_path)

        log.info("source_document_discovery_finished", root=str(root_path), count=len(documents))
        return documents

    def _is_traversable(self, rel_dir: Path) -> bool:
        if is_path_hidden(rel_dir):
            log.debug("hidden_directory_pruned", path=rel_dir.as_posix())
            return False
        return not is_path_excluded(rel_dir, self.exclude_spec, is_dir=True)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        # keep walking the rest of the tree.
        log.warning("source_directory_read_error", path=error.filename, error=str(error))


def find_source_documents(
    root: PathLike,
    extensions: Optional[Iterable[str]] = None,
    exclude_patterns: Optional[List[str]] = None,
    follow_symlinks: bool = False,
) -> List[Path]:
    # convenience wrapper around a one-off SourceDocumentFinder.
    finder = SourceDocumentFinder(exclude_patterns=exclude_patterns, follow_symlinks=follow_symlinks)
    return finder.find(root, extensions)
