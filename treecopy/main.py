# treecopy/main.py
import asyncio
import sys
from pathlib import Path

import click
import pyperclip

from treecopy import config as app_config
from treecopy.clipboard_logic import aggregate_selected, copy_to_clipboard, write_text_file
from treecopy.errors import TreeCopyError
from treecopy.file_processing import count_text_tokens
from treecopy.project_structure_utils import render_structure
from treecopy.tree_scanner import DebouncedScanner


def _fail(message):
    click.echo(click.style(f"ERROR: {message}", fg="red"), err=True)
    sys.exit(1)


def _token_note(text, enabled):
    if not enabled:
        return ""
    return f" (~{count_text_tokens(text):,} tokens)"


def _remember_root(config_path, root):
    # Reload so that command-line overrides are not written back.
    data = app_config.load(config_path)
    data["last_project_dir"] = str(Path(root).resolve())
    try:
        app_config.save(data, config_path)
    except OSError as e:
        click.echo(click.style(f"WARNING: could not save config: {e}", fg="yellow"), err=True)


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="JSON config file (defaults to ./app_config.json).")
@click.option("--ignore", "ignore_glob", default=None, help="Glob of files to leave out of scans.")
@click.option("--tokens", is_flag=True, help="Report the token count of the generated text.")
@click.pass_context
def cli(ctx, config_path, ignore_glob, tokens):
    """Browse a project tree and bundle selected files into one text."""
    settings = app_config.load(config_path)
    if ignore_glob is not None:
        settings["ignore_glob"] = ignore_glob
    if tokens:
        settings["count_tokens"] = True
    ctx.obj = settings
    ctx.meta["config_path"] = config_path


@cli.command()
@click.argument("root", type=click.Path(file_okay=False), required=False)
@click.pass_context
def tree(ctx, root):
    """Scan ROOT (or the last scanned root) and print its file structure."""
    settings = ctx.obj
    root = root or settings["last_project_dir"]
    if not root:
        _fail("No root given and no previous root remembered.")

    scanner = DebouncedScanner(
        root,
        ignore_glob=settings["ignore_glob"],
        debounce_ms=0,
        include_hidden=settings["include_hidden"],
        respect_gitignore=settings["respect_gitignore"],
    )
    try:
        nodes = asyncio.run(scanner.scan())
    except TreeCopyError as e:
        _fail(str(e))

    _remember_root(ctx.meta["config_path"], root)
    structure = render_structure(nodes, Path(root).resolve().name)
    click.echo(structure or "No files found.")


@cli.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.argument("paths", nargs=-1)
@click.pass_obj
def copy(settings, root, paths):
    """Copy the given PATHS (relative to ROOT) to the clipboard."""
    try:
        text = asyncio.run(aggregate_selected(paths, root, settings["fence"]))
    except TreeCopyError as e:
        _fail(str(e))

    try:
        copy_to_clipboard(text)
    except pyperclip.PyperclipException as e:
        _fail(f"Clipboard is not available: {e}")

    click.echo(f"Copied {len(paths)} file(s) to clipboard{_token_note(text, settings['count_tokens'])}.")


@cli.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.argument("paths", nargs=-1)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Destination file (defaults to the configured output_file).")
@click.pass_obj
def export(settings, root, paths, output):
    """Write the given PATHS (relative to ROOT) into one text file."""
    output_path = output or settings["output_file"]

    async def _run():
        text = await aggregate_selected(paths, root, settings["fence"])
        written = await write_text_file(text, output_path)
        return text, written

    try:
        text, written = asyncio.run(_run())
    except TreeCopyError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Failed to write '{output_path}': {e}")

    click.echo(f"Wrote {len(paths)} file(s) to '{written}'{_token_note(text, settings['count_tokens'])}.")


if __name__ == "__main__":
    cli()
