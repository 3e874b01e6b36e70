# treecopy/project_structure_utils.py

LINE_VERTICAL = "│   "
LINE_INTERSECTION = "├── "
LINE_CORNER = "└── "
LINE_EMPTY = "    "


def _has_checked_file(node):
    if node.is_file:
        return node.checked
    return any(_has_checked_file(child) for child in node.children)


def _render_recursive(nodes, prefix_str, only_checked):
    """Recursively generates tree structure lines."""
    lines = []
    visible = [node for node in nodes if not only_checked or _has_checked_file(node)]

    for i, node in enumerate(visible):
        is_last_item = (i == len(visible) - 1)
        if is_last_item:
            entry_line = prefix_str + LINE_CORNER
            new_prefix_for_children = prefix_str + LINE_EMPTY
        else:
            entry_line = prefix_str + LINE_INTERSECTION
            new_prefix_for_children = prefix_str + LINE_VERTICAL

        if node.is_dir:
            lines.append(entry_line + node.name + "/")
            lines.extend(_render_recursive(node.children, new_prefix_for_children, only_checked))
        else:
            lines.append(entry_line + node.name)

    return lines


def render_structure(nodes, root_name, only_checked=False):
    """
    Text tree of the given nodes in their own order, wrapped in <file_map>.
    With only_checked, only checked files and the directories leading to them
    are listed. Returns "" when nothing is listed.
    """
    entry_lines = _render_recursive(nodes, "", only_checked)
    if not entry_lines:
        return ""
    structure_lines = [root_name] if root_name else []
    structure_lines.extend(entry_lines)
    return "<file_map>\n" + "\n".join(structure_lines) + "\n</file_map>"
