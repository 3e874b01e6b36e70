# treecopy/clipboard_logic.py
from pathlib import Path

import aiofiles
import pyperclip

from treecopy.errors import PreconditionFailure
from treecopy.file_processing import read_file_content
from treecopy.logger import setup_app_logger
from treecopy.project_structure_utils import render_structure
from treecopy.tree_constants import DEFAULT_FENCE, BLOCK_SEPARATOR

logger = setup_app_logger("CLIPBOARD")

STRUCTURE_SEPARATOR = "\n\n---\n\n"


def format_block(rel_path, file_content, fence=DEFAULT_FENCE):
    """
    Wraps one file in the fence. Placeholders for binary or unreadable files
    already start with the path, text content gets it prepended.
    """
    if file_content.is_binary:
        body = file_content.content
    else:
        body = f"{rel_path}\n{file_content.content}\n"
    return f"{fence}\n{body}{fence}"


async def aggregate_selected(paths, root, fence=DEFAULT_FENCE):
    """
    Reads the selected files one after another and joins their blocks with a
    blank line, in input order.
    """
    selected = list(paths or [])
    if not selected:
        raise PreconditionFailure("No files selected.")

    file_blocks = []
    for rel_path in selected:
        file_content = await read_file_content(rel_path, root)
        file_blocks.append(format_block(rel_path, file_content, fence))

    logger.debug("Aggregated %d files", len(file_blocks))
    return BLOCK_SEPARATOR.join(file_blocks)


async def compose_selection(paths, root, fence=DEFAULT_FENCE, tree=None, include_structure=False):
    """Aggregated text, optionally preceded by the file map of the checked part of tree."""
    text = await aggregate_selected(paths, root, fence)
    if include_structure and tree:
        root_name = Path(root).name if root else ""
        structure = render_structure(tree, root_name, only_checked=True)
        if structure:
            text = structure + STRUCTURE_SEPARATOR + text
    return text


def copy_to_clipboard(text):
    """Raises pyperclip.PyperclipException when no clipboard mechanism exists."""
    pyperclip.copy(text)
    logger.info("Copied %d characters to clipboard", len(text))


async def write_text_file(text, output_path):
    output_obj = Path(output_path)
    output_obj.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(output_obj, "w", encoding="utf-8") as f:
        await f.write(text)
    logger.info("Wrote %d characters to '%s'", len(text), output_obj)
    return output_obj
