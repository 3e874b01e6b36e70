# treecopy/file_processing.py
from pathlib import Path
from typing import NamedTuple

import aiofiles
import tiktoken

from treecopy.logger import setup_app_logger
from treecopy.tree_constants import (
    BINARY_SAMPLE_SIZE, BINARY_CONTROL_RATIO, ALLOWED_CONTROL_BYTES,
    BINARY_FILE_TEXT, READ_ERROR_TEXT
)

logger = setup_app_logger("FILES")

DEFAULT_TOKEN_ENCODING = "cl100k_base"


class FileContent(NamedTuple):
    content: str
    is_binary: bool


def is_binary(data: bytes) -> bool:
    """
    A NUL byte anywhere means binary. Otherwise the first 1024 bytes are
    sampled and the buffer is binary when more than 30% of them are control
    bytes other than tab, LF and CR.
    """
    if b"\x00" in data:
        return True

    sample = data[:BINARY_SAMPLE_SIZE]
    if not sample:
        return False

    control_count = sum(1 for b in sample if b < 0x20 and b not in ALLOWED_CONTROL_BYTES)
    return control_count / len(sample) > BINARY_CONTROL_RATIO


def binary_placeholder(rel_path):
    return f"{rel_path}\n{BINARY_FILE_TEXT}\n"


def read_error_placeholder(rel_path):
    return f"{rel_path}\n{READ_ERROR_TEXT}\n"


def resolve_inside_root(root, rel_path):
    """Resolves rel_path against root; ValueError if it lands outside root."""
    root_obj = Path(root).resolve()
    full_path = (root_obj / rel_path).resolve()
    full_path.relative_to(root_obj)
    return full_path


async def read_file_content(rel_path, root) -> FileContent:
    """
    Reads one selected file. Never raises: a file that cannot be read or
    decoded comes back as an error placeholder flagged as binary, so one bad
    file does not abort the whole aggregation.
    """
    if root is None:
        logger.warning("Cannot read '%s': workspace root is not set", rel_path)
        return FileContent(read_error_placeholder(rel_path), True)

    try:
        full_path = resolve_inside_root(root, rel_path)
        async with aiofiles.open(full_path, "rb") as f:
            data = await f.read()
        if is_binary(data):
            return FileContent(binary_placeholder(rel_path), True)
        return FileContent(data.decode("utf-8"), False)
    except (OSError, ValueError) as e:
        # ValueError covers both a path escaping the root and UnicodeDecodeError.
        logger.warning("Failed to read '%s': %s", rel_path, e)
        return FileContent(read_error_placeholder(rel_path), True)


def count_text_tokens(text, encoding_name=DEFAULT_TOKEN_ENCODING):
    if not text.strip():
        return 0
    encoding = tiktoken.get_encoding(encoding_name)
    return len(encoding.encode(text, disallowed_special=()))
