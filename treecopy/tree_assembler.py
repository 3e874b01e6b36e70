# treecopy/tree_assembler.py
from pathlib import PurePath

from treecopy.file_node import FileNode
from treecopy.logger import setup_app_logger
from treecopy.tree_constants import FILE_TYPE, DIRECTORY_TYPE, PATH_SEPARATOR

logger = setup_app_logger("ASSEMBLER")


def _relative_segments(raw_path, root_obj):
    path_obj = PurePath(raw_path)
    if path_obj.is_absolute():
        if root_obj is None:
            raise ValueError("absolute path given without a workspace root")
        path_obj = path_obj.relative_to(root_obj)
    return [part for part in path_obj.parts if part not in ("", ".")]


def _flatten(level):
    """Turns the per-level ordered dicts into children lists, in insertion order."""
    nodes = []
    for node, sub_level in level.values():
        node.children = _flatten(sub_level)
        nodes.append(node)
    return nodes


def assemble_tree(paths, root=None):
    """
    Builds the nested tree from a flat list of file paths.

    Paths are absolute under `root` or already relative to it. Only files are
    listed; intermediate directories are synthesized. Every level is an
    ordered dict {segment: (node, sub_level)}, so a directory seen again from
    another path is reused, and sibling order follows the input.
    """
    root_obj = PurePath(root) if root is not None else None
    top_level = {}

    for raw_path in paths:
        try:
            segments = _relative_segments(raw_path, root_obj)
        except ValueError as e:
            logger.warning("Skipping '%s': %s", raw_path, e)
            continue
        if not segments:
            continue

        level = top_level
        last_index = len(segments) - 1
        for depth, segment in enumerate(segments):
            entry = level.get(segment)
            if entry is None:
                node = FileNode(
                    name=segment,
                    path=PATH_SEPARATOR.join(segments[:depth + 1]),
                    type=FILE_TYPE if depth == last_index else DIRECTORY_TYPE,
                )
                entry = level[segment] = (node, {})
            elif entry[0].is_file and depth != last_index:
                logger.warning("Skipping '%s': '%s' is a file", raw_path, entry[0].path)
                break
            elif entry[0].is_dir and depth == last_index:
                logger.warning("Skipping '%s': '%s' is a directory", raw_path, entry[0].path)
                break
            level = entry[1]

    return _flatten(top_level)
