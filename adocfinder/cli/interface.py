# adocfinder/cli/interface.py
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import fields as dataclass_fields, MISSING

import click
from click.core import ParameterSource
from click_option_group import optgroup
import structlog

from adocfinder import __version__ as app_version
from adocfinder.config.settings import (
    FinderConfig, SortMethod, OutputFormat,
    DEFAULT_SOURCE_DOCUMENT_EXTENSIONS, DEFAULT_SORT_METHOD, DEFAULT_OUTPUT_FORMAT,
    DEFAULT_CONSOLE_SHOW_SUMMARY, DEFAULT_CONSOLE_SHOW_TREE,
)
from adocfinder.config.loader import (
    load_and_merge_configs, save_config_to_profile,
    CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP,
)
from adocfinder.logging_setup import configure_logging
from adocfinder.core.output import write_to_stdout, write_to_file
from adocfinder.core.pipeline import SourceDocumentCollector, render_document_list
from adocfinder.cli.console_output import print_cli_summary_output
from adocfinder.exceptions import AdocFinderError

log = structlog.get_logger(__name__)

ENUM_ATTRS = {
    "sort_method": SortMethod,
    "output_format": OutputFormat,
}

# cli parameter name -> FinderConfig attribute, for options whose names differ.
CLI_PARAM_TO_FINDERCONFIG_ATTR = {
    "source_directory": "source_directory",
    "extensions": "source_document_extensions",
    "source_document_name": "source_document_name",
    "exclude_patterns": "exclude_patterns",
    "follow_symlinks": "follow_symlinks",
    "sort_method_str": "sort_method",
    "output_format_str": "output_format",
    "absolute_paths": "absolute_paths",
    "output_file": "output_file",
    "console_show_summary": "console_show_summary",
    "console_show_tree": "console_show_tree",
    "save_profile_name": "save_profile_name",
}


def _default_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    for fd in dataclass_fields(FinderConfig):
        if fd.init:
            options[fd.name] = fd.default_factory() if fd.default_factory is not MISSING else fd.default
    return options


def _apply_toml_settings(effective_options: Dict[str, Any], toml_settings: Dict[str, Any]):
    for toml_k, fc_attr in CONFIG_KEY_TO_FINDERCONFIG_ATTR_MAP.items():
        if toml_k not in toml_settings:
            continue
        value = toml_settings[toml_k]
        if fc_attr in ENUM_ATTRS:
            parsed = ENUM_ATTRS[fc_attr].from_string(value) if isinstance(value, str) else None
            if parsed is None:
                # invalid enum strings keep whatever was already in effect.
                continue
            value = parsed
        effective_options[fc_attr] = value


def build_effective_config(ctx: click.Context, cli_params: Dict[str, Any]) -> FinderConfig:
    # layers dataclass defaults, config files, the selected profile, then cli flags.
    effective_options = _default_options()
    raw_configs_from_toml_files = load_and_merge_configs()
    _apply_toml_settings(effective_options, raw_configs_from_toml_files)

    active_profile_name: Optional[str] = cli_params.get("active_config_profile_name")
    if active_profile_name:
        profile_values = raw_configs_from_toml_files.get("profiles", {}).get(active_profile_name, {})
        if profile_values:
            log.info("applying_profile_settings", profile=active_profile_name)
            _apply_toml_settings(effective_options, profile_values)
        else:
            log.warning("profile_not_found_in_config_files", profile_name=active_profile_name)

    for param_name, fc_attr in CLI_PARAM_TO_FINDERCONFIG_ATTR.items():
        if ctx.get_parameter_source(param_name) != ParameterSource.COMMANDLINE:
            continue
        value = cli_params[param_name]
        if fc_attr in ENUM_ATTRS:
            value = ENUM_ATTRS[fc_attr].from_string(value)
        elif isinstance(value, tuple):
            value = list(value)
        effective_options[fc_attr] = value

    if cli_params.get("no_extensions"):
        effective_options["source_document_extensions"] = []

    return FinderConfig(**effective_options)


def _run_discovery_flow(config: FinderConfig):
    log.info("discovery_orchestration_started", source_directory=str(config.source_directory))
    collector = SourceDocumentCollector(config)
    documents = collector.collect()
    rendered = render_document_list(documents, config)

    if config.output_file:
        write_to_file(config.output_file, rendered)
        click.echo(f"Info: Output written to: {config.output_file}", err=True)
    else:
        log.info("writing_final_output_to_stdout")
        write_to_stdout(rendered)

    print_cli_summary_output(config, documents)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("source_directory", required=False, type=click.Path(file_okay=True, dir_okay=True, path_type=Path))
@optgroup.group("Selection Options", help="Control which files count as source documents.")
@optgroup.option("-x", "--extension", "extensions", multiple=True, metavar="EXT", help=f"Accepted file name suffix, without the dot. Repeatable. Default: {', '.join(DEFAULT_SOURCE_DOCUMENT_EXTENSIONS)}.")
@optgroup.option("--no-extensions", "no_extensions", is_flag=True, default=False, help="Accept no extensions at all (selects nothing).")
@optgroup.option("-d", "--source-document-name", "source_document_name", default=None, help="Select one document, relative to the source directory, instead of walking it.")
@optgroup.option("-e", "--exclude", "exclude_patterns", multiple=True, help="Glob patterns (relative to the source directory) to exclude.")
@optgroup.option("-L", "--follow-symlinks", "follow_symlinks", is_flag=True, default=False, help="Follow symbolic links to directories.")
@optgroup.group("Output Options", help="Control how the document list is written.")
@optgroup.option("--sort", "sort_method_str", type=click.Choice([s.value for s in SortMethod]), default=None, help=f"Order of the listing. Default: {DEFAULT_SORT_METHOD.value}.")
@optgroup.option("-F", "--output-format", "output_format_str", type=click.Choice([f.value for f in OutputFormat]), default=None, help=f"Listing format. Default: {DEFAULT_OUTPUT_FORMAT.value}.")
@optgroup.option("--absolute-paths", "absolute_paths", is_flag=True, default=False, help="List absolute paths instead of paths relative to the source directory.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the listing to.")
@optgroup.group("Console Feedback", help="Customize terminal output during execution (stderr).")
@optgroup.option("--console-summary/--no-console-summary", "console_show_summary", default=None, help=f"Show document count summary. Default: {'on' if DEFAULT_CONSOLE_SHOW_SUMMARY else 'off'}.")
@optgroup.option("--console-tree/--no-console-tree", "console_show_tree", default=None, help=f"Show the document tree. Default: {'on' if DEFAULT_CONSOLE_SHOW_TREE else 'off'}.")
@optgroup.group("Application Behavior", help="Configuration profiles, saving, and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--save", "save_profile_name", type=str, metavar="PROFILE_NAME", default=None, help="Save options to a profile in the project's .adocfinder.toml. Exits after saving.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="adocfinder", prog_name="adocfinder", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, **cli_params: Any):
    """adocfinder: list the AsciiDoc source documents under SOURCE_DIRECTORY,
    skipping files and directories whose names start with an underscore."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs_cli", False))

    log.debug("cli_command_invoked", params={k: v for k, v in cli_params.items() if v is not None})

    try:
        final_config = build_effective_config(ctx, cli_params)

        if final_config.save_profile_name:
            if save_config_to_profile(final_config, final_config.save_profile_name):
                click.echo(f"Info: Profile '{final_config.save_profile_name}' saved.", err=True)
            else:
                click.echo("Info: No non-default options to save.", err=True)
            ctx.exit(0)

        _run_discovery_flow(final_config)

    except click.exceptions.Exit:
        raise
    except AdocFinderError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
