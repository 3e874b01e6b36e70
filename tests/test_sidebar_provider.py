import pyperclip
import pytest

from treecopy import config as app_config
from treecopy.sidebar_provider import SidebarProvider


class Recorder:
    def __init__(self):
        self.notifications = []
        self.clipboard = []

    def notify(self, text, tag):
        self.notifications.append((tag, text))

    def copy(self, text):
        self.clipboard.append(text)


@pytest.fixture
def recorder():
    return Recorder()


def _provider(root, recorder, **overrides):
    settings = app_config.DEFAULTS.copy()
    settings["debounce_ms"] = 10
    settings.update(overrides)
    return SidebarProvider(root, settings, notifier=recorder.notify, clipboard=recorder.copy)


@pytest.mark.asyncio
async def test_get_file_tree(workspace, recorder):
    provider = _provider(workspace, recorder)
    reply = await provider.handle_message({"type": "getFileTree"})
    assert reply["type"] == "fileTree"
    assert [node["name"] for node in reply["value"]] == ["README.md", "assets", "src"]
    src = reply["value"][2]
    assert src["type"] == "directory"
    assert src["checked"] is False
    assert src["partiallyChecked"] is False


@pytest.mark.asyncio
async def test_get_file_tree_without_root(recorder):
    provider = _provider(None, recorder)
    reply = await provider.handle_message({"type": "getFileTree"})
    assert reply["type"] == "error"
    assert recorder.notifications[-1][0] == "error"


@pytest.mark.asyncio
async def test_set_tree_then_copy_checked_files(workspace, recorder):
    provider = _provider(workspace, recorder)
    tree = (await provider.handle_message({"type": "getFileTree"}))["value"]
    tree[0]["checked"] = True  # README.md
    tree[2]["children"][0]["checked"] = True  # src/app.py

    saved = await provider.handle_message({"type": "setFileTree", "value": tree})
    assert saved == {"type": "fileTreeSaved", "value": 3}
    assert (await provider.handle_message({"type": "getFileTree"}))["value"] == tree

    reply = await provider.handle_message({"type": "copyToClipboard"})
    assert reply == {"type": "copied", "value": {"files": 2, "tokens": None}}
    assert recorder.clipboard == [
        "```\nREADME.md\n# Project\n\n```\n\n```\nsrc/app.py\nprint('app')\n\n```"
    ]
    assert recorder.notifications[-1] == ("success", "Copied 2 files to clipboard.")


@pytest.mark.asyncio
async def test_copy_explicit_paths(workspace, recorder):
    provider = _provider(workspace, recorder)
    reply = await provider.handle_message({"type": "copyToClipboard", "value": ["src/app.py"]})
    assert reply["value"]["files"] == 1
    assert recorder.clipboard == ["```\nsrc/app.py\nprint('app')\n\n```"]


@pytest.mark.asyncio
async def test_copy_with_nothing_selected(workspace, recorder):
    provider = _provider(workspace, recorder)
    reply = await provider.handle_message({"type": "copyToClipboard"})
    assert reply == {"type": "error", "value": "No files selected."}
    assert recorder.clipboard == []


@pytest.mark.asyncio
async def test_clipboard_failure_is_reported(workspace, recorder):
    def broken_clipboard(text):
        raise pyperclip.PyperclipException("no clipboard")

    provider = SidebarProvider(workspace, notifier=recorder.notify, clipboard=broken_clipboard)
    reply = await provider.handle_message({"type": "copyToClipboard", "value": ["README.md"]})
    assert reply["type"] == "error"
    assert "no clipboard" in reply["value"]


@pytest.mark.asyncio
async def test_generate_text_file(workspace, recorder, tmp_path):
    provider = _provider(workspace, recorder)
    output = tmp_path / "bundle.txt"
    reply = await provider.handle_message({
        "type": "generateTextFile",
        "value": {"paths": ["README.md", "assets/logo.bin"], "outputPath": str(output)},
    })
    assert reply == {"type": "textFileGenerated", "value": str(output)}
    assert output.read_text(encoding="utf-8") == (
        "```\nREADME.md\n# Project\n\n```\n\n```\nassets/logo.bin\nBinary file.\n```"
    )


@pytest.mark.asyncio
async def test_generate_text_file_default_output(workspace, recorder):
    provider = _provider(workspace, recorder, output_file="bundle.txt")
    reply = await provider.handle_message({"type": "generateTextFile", "value": {"paths": ["README.md"]}})
    assert reply["value"] == str(workspace / "bundle.txt")


@pytest.mark.asyncio
async def test_refresh_rescans(workspace, recorder):
    provider = _provider(workspace, recorder)
    await provider.handle_message({"type": "getFileTree"})
    (workspace / "added.txt").write_text("x", encoding="utf-8")
    reply = await provider.handle_message({"type": "refreshFileTree"})
    assert "added.txt" in [node["name"] for node in reply["value"]]


@pytest.mark.asyncio
async def test_invalid_tree_is_rejected(workspace, recorder):
    provider = _provider(workspace, recorder)
    reply = await provider.handle_message({"type": "setFileTree", "value": [{"name": "x", "type": "file"}]})
    assert reply["type"] == "error"
    assert provider.cache.get() is None


@pytest.mark.asyncio
async def test_info_and_error_notifications(workspace, recorder):
    provider = _provider(workspace, recorder)
    assert await provider.handle_message({"type": "onInfo", "value": "hi"}) is None
    assert await provider.handle_message({"type": "onError", "value": "bad"}) is None
    assert await provider.handle_message({"type": "onInfo"}) is None
    assert recorder.notifications == [("info", "hi"), ("error", "bad")]


@pytest.mark.asyncio
async def test_unknown_message(workspace, recorder):
    provider = _provider(workspace, recorder)
    reply = await provider.handle_message({"type": "bogus"})
    assert reply == {"type": "error", "value": "Unknown message type: bogus"}
