# treecopy/sidebar_provider.py
from pathlib import Path

import pyperclip

from treecopy import config as app_config
from treecopy.clipboard_logic import compose_selection, copy_to_clipboard, write_text_file
from treecopy.errors import TreeCopyError, PreconditionFailure
from treecopy.file_node import FileNode, collect_checked_paths
from treecopy.file_processing import count_text_tokens
from treecopy.logger import setup_app_logger
from treecopy.tree_constants import INFO_TAG, SUCCESS_TAG, WARNING_TAG, ERROR_TAG
from treecopy.tree_scanner import TreeCache, DebouncedScanner

logger = setup_app_logger("SIDEBAR")

_LOG_LEVELS = {
    INFO_TAG: logger.info,
    SUCCESS_TAG: logger.info,
    WARNING_TAG: logger.warning,
    ERROR_TAG: logger.error,
}


def log_notifier(text, tag=INFO_TAG):
    _LOG_LEVELS.get(tag, logger.info)(text)


def _files_word(count):
    return "file" if count == 1 else "files"


class SidebarProvider:
    """
    Message-driven host around the core: scans the workspace for the panel,
    keeps its selection edits and turns the selection into clipboard text or
    a text file. Every reply is a dict {"type": ..., "value": ...}.
    """

    def __init__(self, workspace_root, settings=None, notifier=None, clipboard=None):
        self.workspace_root = Path(workspace_root) if workspace_root else None
        self.settings = settings if settings is not None else app_config.DEFAULTS.copy()
        self.notify = notifier or log_notifier
        self.clipboard = clipboard or copy_to_clipboard
        self.cache = TreeCache()
        self.scanner = DebouncedScanner(
            self.workspace_root,
            self.cache,
            ignore_glob=self.settings.get("ignore_glob", app_config.DEFAULTS["ignore_glob"]),
            debounce_ms=self.settings.get("debounce_ms", app_config.DEFAULTS["debounce_ms"]),
            include_hidden=self.settings.get("include_hidden", False),
            respect_gitignore=self.settings.get("respect_gitignore", False),
        )
        self._handlers = {
            "getFileTree": self._on_get_file_tree,
            "refreshFileTree": self._on_refresh_file_tree,
            "setFileTree": self._on_set_file_tree,
            "copyToClipboard": self._on_copy_to_clipboard,
            "generateTextFile": self._on_generate_text_file,
            "onInfo": self._on_info,
            "onError": self._on_error,
        }

    async def handle_message(self, message):
        message_type = message.get("type")
        handler = self._handlers.get(message_type)
        if handler is None:
            logger.warning("Unknown message type: %r", message_type)
            return self._error_reply(f"Unknown message type: {message_type}")
        return await handler(message.get("value"))

    def _error_reply(self, reason):
        self.notify(reason, ERROR_TAG)
        return {"type": "error", "value": reason}

    async def _on_get_file_tree(self, value):
        try:
            tree = await self.scanner.scan()
        except TreeCopyError as e:
            return self._error_reply(str(e))
        return {"type": "fileTree", "value": [node.to_dict() for node in tree]}

    async def _on_refresh_file_tree(self, value):
        self.scanner.invalidate()
        return await self._on_get_file_tree(value)

    async def _on_set_file_tree(self, value):
        try:
            tree = [FileNode.from_dict(item) for item in value or []]
        except (KeyError, TypeError, ValueError) as e:
            return self._error_reply(f"Invalid tree: {e}")
        self.scanner.set_tree(tree)
        return {"type": "fileTreeSaved", "value": len(tree)}

    def _selected_paths(self, paths):
        if paths:
            return list(paths)
        tree = self.cache.get()
        return collect_checked_paths(tree) if tree else []

    async def _compose(self, paths):
        selected = self._selected_paths(paths)
        if not selected:
            raise PreconditionFailure("No files selected.")
        text = await compose_selection(
            selected,
            self.workspace_root,
            fence=self.settings.get("fence", app_config.DEFAULTS["fence"]),
            tree=self.cache.get(),
            include_structure=self.settings.get("include_structure", False),
        )
        tokens = count_text_tokens(text) if self.settings.get("count_tokens") else None
        return selected, text, tokens

    def _summary(self, count, tokens):
        summary = f"{count} {_files_word(count)}"
        if tokens is not None:
            summary += f" (~{tokens:,} tokens)"
        return summary

    async def _on_copy_to_clipboard(self, value):
        try:
            selected, text, tokens = await self._compose(value)
        except TreeCopyError as e:
            return self._error_reply(str(e))

        try:
            self.clipboard(text)
        except pyperclip.PyperclipException as e:
            return self._error_reply(f"Clipboard is not available: {e}")

        self.notify(f"Copied {self._summary(len(selected), tokens)} to clipboard.", SUCCESS_TAG)
        return {"type": "copied", "value": {"files": len(selected), "tokens": tokens}}

    async def _on_generate_text_file(self, value):
        value = value or {}
        output_path = value.get("outputPath") or self.settings.get("output_file", app_config.DEFAULTS["output_file"])
        if self.workspace_root is not None and not Path(output_path).is_absolute():
            output_path = self.workspace_root / output_path

        try:
            selected, text, tokens = await self._compose(value.get("paths"))
        except TreeCopyError as e:
            return self._error_reply(str(e))

        try:
            written = await write_text_file(text, output_path)
        except OSError as e:
            return self._error_reply(f"Failed to write '{output_path}': {e}")

        self.notify(f"Wrote {self._summary(len(selected), tokens)} to '{written}'.", SUCCESS_TAG)
        return {"type": "textFileGenerated", "value": str(written)}

    async def _on_info(self, value):
        if value:
            self.notify(value, INFO_TAG)
        return None

    async def _on_error(self, value):
        if value:
            self.notify(value, ERROR_TAG)
        return None
