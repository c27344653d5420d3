# adocfinder/config/loader.py
"""
Handles loading, merging, and saving of configurations from/to TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import asdict, fields as dataclass_fields, MISSING
from enum import Enum
import structlog

from adocfinder.exceptions import ConfigError

from .settings import FinderConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".adocfinder.toml", "adocfinder.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "adocfinder"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP: Dict[str, str] = {
    "source_directory": "source_directory",
    "extensions": "source_document_extensions",
    "source_document_name": "source_document_name",
    "exclude_patterns": "exclude_patterns",
    "follow_symlinks": "follow_symlinks",
    "sort": "sort_method",
    "output_format": "output_format",
    "absolute_paths": "absolute_paths",
    "output_file": "output_file",
    "console_show_summary": "console_show_summary",
    "console_show_tree": "console_show_tree",
}


def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except Exception as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("adocfinder", {})
    return data


def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    # user-global settings first, then the first project config file found.
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    search_dir = project_dir or Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = search_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
            user_profiles.update(project_profiles)
            merged_toml_data["profiles"] = user_profiles
        elif isinstance(project_profiles, dict):
            merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        log.debug("project_config_applied", source_file=str(candidate))
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data


def _field_default(pc_attr: str) -> Any:
    field_def = next((f for f in dataclass_fields(FinderConfig) if f.name == pc_attr), None)
    if field_def is None:
        return None
    if field_def.default_factory is not MISSING:
        return field_def.default_factory()
    return field_def.default


def save_config_to_profile(config_to_save: FinderConfig, profile_name: str, project_dir: Optional[Path] = None) -> bool:
    base = project_dir or Path.cwd()
    target_toml_path = base / ".adocfinder.toml"
    if not target_toml_path.exists():
        alt_path = base / "adocfinder.toml"
        if alt_path.exists():
            target_toml_path = alt_path
    log.info("attempting_to_save_profile", profile=profile_name, path=str(target_toml_path))

    attr_to_toml_key = {v: k for k, v in CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP.items()}
    profile_data: Dict[str, Any] = {}

    for pc_attr, value in asdict(config_to_save).items():
        toml_key = attr_to_toml_key.get(pc_attr)
        if not toml_key:
            continue
        if value == _field_default(pc_attr):
            continue

        if isinstance(value, Path):
            profile_data[toml_key] = str(value)
        elif isinstance(value, Enum):
            profile_data[toml_key] = value.value
        elif value is not None:
            profile_data[toml_key] = value

    if not profile_data:
        log.info("no_options_to_save_for_profile", profile=profile_name)
        return False

    existing_data: Dict[str, Any] = {}
    if target_toml_path.exists():
        try:
            existing_data = toml.load(target_toml_path)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"could not read existing TOML {target_toml_path} to save profile: {e}")

    if profile_name.upper() == "DEFAULT":
        profiles_bak = existing_data.pop("profiles", None)
        existing_data.update(profile_data)
        if profiles_bak is not None:
            existing_data["profiles"] = profiles_bak
    else:
        existing_data.setdefault("profiles", {})[profile_name] = profile_data

    try:
        with target_toml_path.open("w", encoding="utf-8") as f:
            toml.dump(existing_data, f)
    except OSError as e:
        raise ConfigError(f"error writing profile '{profile_name}' to {target_toml_path}: {e}")
    log.info("profile_saved_successfully", profile=profile_name, path=str(target_toml_path))
    return True
