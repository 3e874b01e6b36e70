# treecopy/fs_scanner_utils.py
from pathlib import Path

from gitignore_parser import parse_gitignore
from wcmatch import glob as wcglob

from treecopy.errors import EnumerationFailure, MisconfiguredRoot
from treecopy.logger import setup_app_logger
from treecopy.tree_constants import DEFAULT_IGNORE_GLOB

logger = setup_app_logger("FS_SCANNER")

ALL_FILES_PATTERN = "**/*"


def _load_gitignore_matcher(root_dir_obj: Path):
    gi_file = root_dir_obj / ".gitignore"
    if not gi_file.is_file():
        return None
    logger.debug("Using .gitignore from '%s'", gi_file)
    return parse_gitignore(str(gi_file), base_dir=str(root_dir_obj))


def list_workspace_files(
    root,
    ignore_glob=DEFAULT_IGNORE_GLOB,
    include_hidden=False,
    respect_gitignore=False
):
    """
    Lists every file under root as a sorted list of '/'-separated relative
    paths. Directories are not listed. Blocking; the scanner runs it in a
    worker thread.
    """
    if root is None:
        raise MisconfiguredRoot("No workspace root is set.")

    root_dir_obj = Path(root)
    if not root_dir_obj.is_dir():
        raise EnumerationFailure(f"Workspace root '{root}' is not a directory.")

    flags = wcglob.GLOBSTAR | wcglob.NODIR
    if include_hidden:
        flags |= wcglob.DOTGLOB

    try:
        matches = wcglob.glob(
            ALL_FILES_PATTERN,
            root_dir=str(root_dir_obj),
            flags=flags,
            exclude=ignore_glob or None,
        )
        gitignore_matcher = _load_gitignore_matcher(root_dir_obj.resolve()) if respect_gitignore else None
    except (OSError, ValueError) as e:
        # ValueError includes a .gitignore that is not valid UTF-8.
        raise EnumerationFailure(f"Failed to list files under '{root}': {e}") from e

    rel_paths = []
    for match in matches:
        rel_path = Path(match).as_posix()
        if gitignore_matcher and gitignore_matcher(str(root_dir_obj.resolve() / match)):
            continue
        rel_paths.append(rel_path)

    rel_paths.sort()
    logger.debug("Listed %d files under '%s'", len(rel_paths), root)
    return rel_paths
