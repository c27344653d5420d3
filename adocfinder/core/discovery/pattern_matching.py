# adocfinder/core/discovery/pattern_matching.py
from pathlib import Path
from typing import Optional, Iterable, List
import pathspec
import structlog

from adocfinder.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

HIDDEN_PREFIX = "_"

def is_name_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)

def is_path_hidden(path_relative_to_root: Path) -> bool:
    # checks if any segment below the search root starts with an underscore.
    # segments above the root never reach here, so enclosing `_dirs` are fine.
    return any(is_name_hidden(part) for part in path_relative_to_root.parts if part not in (".", ".."))

def has_source_extension(file_name: str, extensions: Iterable[str]) -> bool:
    # the suffix must follow a dot and a non-empty stem: "x.my-adoc" is not an "adoc".
    for ext in extensions:
        suffix = "." + ext
        if len(file_name) > len(suffix) and file_name.endswith(suffix):
            return True
    return False

def compile_glob_patterns_to_spec(glob_patterns: List[str]) -> Optional[pathspec.PathSpec]:
    # compiles a list of glob patterns into a pathspec object for matching.
    if not glob_patterns:
        return None
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", glob_patterns)
    except Exception as e:
        raise DiscoveryError(f"error compiling glob patterns {glob_patterns}: {e}")

def is_path_excluded(path_relative_to_root: Path, exclude_spec: Optional[pathspec.PathSpec], is_dir: bool = False) -> bool:
    if exclude_spec is None:
        return False
    path_str = path_relative_to_root.as_posix()
    if is_dir:
        # gitwildmatch directory patterns ("build/") only match with a trailing slash.
        path_str += "/"
    return exclude_spec.match_file(path_str)
