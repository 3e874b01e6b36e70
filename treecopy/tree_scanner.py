# treecopy/tree_scanner.py
import asyncio
from pathlib import Path

from treecopy.errors import EnumerationFailure
from treecopy.fs_scanner_utils import list_workspace_files
from treecopy.logger import setup_app_logger
from treecopy.tree_assembler import assemble_tree
from treecopy.tree_constants import DEFAULT_IGNORE_GLOB, DEFAULT_DEBOUNCE_MS

logger = setup_app_logger("SCANNER")

# --- Scanner states ---
IDLE = "idle"
PENDING = "pending"
SCANNING = "scanning"


class TreeCache:
    """Holds the last assembled tree for the session. No disk backing."""

    def __init__(self):
        self._tree = None

    def get(self):
        return self._tree

    def set(self, tree):
        self._tree = tree

    def invalidate(self):
        self._tree = None

    @property
    def is_populated(self):
        return self._tree is not None


class DebouncedScanner:
    """
    Scans the workspace on demand, coalescing bursts of requests.

    A scan() with a populated cache returns the cached tree right away.
    Otherwise the caller is registered and the debounce timer is (re)armed;
    only when the timer survives the whole window does one enumeration run,
    and every registered caller gets the same tree object (or the same
    EnumerationFailure). Callers arriving mid-scan join the running scan.
    """

    def __init__(
        self,
        root,
        cache=None,
        ignore_glob=DEFAULT_IGNORE_GLOB,
        debounce_ms=DEFAULT_DEBOUNCE_MS,
        include_hidden=False,
        respect_gitignore=False
    ):
        self.root = Path(root) if root else None
        self.cache = cache if cache is not None else TreeCache()
        self.ignore_glob = ignore_glob
        self.debounce_ms = debounce_ms
        self.include_hidden = include_hidden
        self.respect_gitignore = respect_gitignore

        self.state = IDLE
        self.enumeration_count = 0
        self._timer = None
        self._scan_task = None
        self._waiters = []
        self._generation = 0

    async def scan(self):
        cached = self.cache.get()
        if cached is not None:
            logger.debug("Returning cached tree (%d root entries)", len(cached))
            return cached

        loop = asyncio.get_running_loop()
        waiter = loop.create_future()
        self._waiters.append(waiter)

        if self.state != SCANNING:
            self._restart_timer(loop)

        return await waiter

    def set_tree(self, tree):
        """
        Replaces the cache with a tree supplied by the host. A pending scan is
        dropped and its callers get this tree; a running scan will not
        overwrite it.
        """
        self._generation += 1
        self.cache.set(tree)
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self.state == PENDING:
            self.state = IDLE
        self._resolve_waiters(tree=tree)

    def invalidate(self):
        self._generation += 1
        self.cache.invalidate()

    def _restart_timer(self, loop):
        if self._timer is not None:
            self._timer.cancel()
        self.state = PENDING
        self._timer = loop.call_later(self.debounce_ms / 1000, self._on_timer)

    def _on_timer(self):
        self._timer = None
        self.state = SCANNING
        self._scan_task = asyncio.ensure_future(self._run_scan())

    async def _run_scan(self):
        logger.info("Scanning workspace '%s'", self.root)
        self.enumeration_count += 1
        generation = self._generation
        try:
            rel_paths = await asyncio.to_thread(
                list_workspace_files,
                self.root,
                self.ignore_glob,
                self.include_hidden,
                self.respect_gitignore,
            )
            tree = assemble_tree(rel_paths, self.root)
        except EnumerationFailure as e:
            logger.error("Workspace scan failed: %s", e)
            self._settle(error=e)
            return
        except Exception as e:
            logger.exception("Workspace scan failed unexpectedly")
            error = EnumerationFailure(f"Scanning '{self.root}' failed: {e}")
            error.__cause__ = e
            self._settle(error=error)
            return

        if generation == self._generation:
            self.cache.set(tree)
        else:
            logger.debug("Tree was replaced or invalidated during the scan; not caching it")
        logger.info("Scan finished: %d files, %d root entries", len(rel_paths), len(tree))
        self._settle(tree=tree)

    def _settle(self, tree=None, error=None):
        self.state = IDLE
        self._scan_task = None
        self._resolve_waiters(tree=tree, error=error)

    def _resolve_waiters(self, tree=None, error=None):
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(tree)
