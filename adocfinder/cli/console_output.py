# adocfinder/cli/console_output.py
"""
Handles printing summary information to the console (stderr) during CLI execution.
"""
from pathlib import Path
from typing import Dict, List

import click
import structlog
from rich.console import Console as RichConsole
from rich.tree import Tree

from adocfinder.config.settings import FinderConfig
from adocfinder.core.pipeline import relative_display_path

log = structlog.get_logger(__name__)


def build_document_tree(documents: List[Path], source_directory: Path) -> Tree:
    """
    Builds a rich Tree of the documents, one branch per directory below
    the source directory.
    """
    root_label = source_directory.name or str(source_directory)
    tree = Tree(f"{root_label}/")
    branches: Dict[str, Tree] = {}

    for rel_str in sorted(relative_display_path(doc, source_directory) for doc in documents):
        parts = rel_str.split("/")
        parent = tree
        for depth in range(1, len(parts)):
            dir_key = "/".join(parts[:depth])
            if dir_key not in branches:
                branches[dir_key] = parent.add(f"{parts[depth - 1]}/")
            parent = branches[dir_key]
        parent.add(parts[-1])
    return tree


def print_cli_summary_output(config: FinderConfig, documents: List[Path]):
    """
    Prints the document count and, optionally, the document tree to stderr.
    """
    log.debug("console_summary_output_requested")

    if config.console_show_summary:
        click.secho("--- Execution Summary ---", fg="cyan", err=True)
        extensions = ", ".join(config.source_document_extensions) or "(none)"
        click.echo(f"Source documents found: {len(documents)} (extensions: {extensions})", err=True)

    if config.console_show_tree and documents:
        click.secho("\n--- Source Document Tree ---", fg="cyan", err=True)
        RichConsole(stderr=True).print(build_document_tree(documents, config.source_directory))
