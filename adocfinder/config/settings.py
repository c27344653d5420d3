from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
import structlog

log = structlog.get_logger(__name__)

DEFAULT_SOURCE_DIRECTORY = Path("src/docs/asciidoc")
DEFAULT_SOURCE_DOCUMENT_EXTENSIONS = ("ad", "adoc", "asc", "asciidoc")
DEFAULT_CONSOLE_SHOW_SUMMARY = False
DEFAULT_CONSOLE_SHOW_TREE = False

class SortMethod(Enum):
    # defines how discovered documents are ordered in the output.
    TRAVERSAL = "traversal"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["SortMethod"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_sort_method_string", input_string=s)
            return None

class OutputFormat(Enum):
    # defines supported output formats for the document listing.
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_string(cls, s: Optional[str]) -> Optional["OutputFormat"]:
        if not s:
            return None
        try:
            return cls(s.lower())
        except ValueError:
            log.warning("invalid_output_format_string", input_string=s)
            return None

DEFAULT_SORT_METHOD = SortMethod.TRAVERSAL
DEFAULT_OUTPUT_FORMAT = OutputFormat.TEXT

@dataclass
class FinderConfig:
    # holds all configuration parameters for a single run.
    source_directory: Path = DEFAULT_SOURCE_DIRECTORY
    source_document_extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_SOURCE_DOCUMENT_EXTENSIONS)
    )
    source_document_name: Optional[str] = None
    exclude_patterns: List[str] = field(default_factory=list)
    follow_symlinks: bool = False
    sort_method: SortMethod = DEFAULT_SORT_METHOD
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT
    absolute_paths: bool = False
    output_file: Optional[Path] = None
    console_show_summary: bool = DEFAULT_CONSOLE_SHOW_SUMMARY
    console_show_tree: bool = DEFAULT_CONSOLE_SHOW_TREE
    save_profile_name: Optional[str] = None

    def __post_init__(self):
        # coerces values that may arrive as plain strings from toml files.
        if not isinstance(self.source_directory, Path):
            self.source_directory = Path(self.source_directory)
        if isinstance(self.output_file, str):
            self.output_file = Path(self.output_file) if self.output_file else None
        if isinstance(self.source_document_extensions, str):
            self.source_document_extensions = [self.source_document_extensions]
        if isinstance(self.exclude_patterns, str):
            self.exclude_patterns = [self.exclude_patterns]
        self.source_document_extensions = list(self.source_document_extensions)
        self.exclude_patterns = list(self.exclude_patterns)
