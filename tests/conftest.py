import asyncio

import pytest

from app.main import app
from app.services.extractor import get_extractor
from app.services.ytdlp import CompletedProcess

VIDEO_ID = "dQw4w9WgXcQ"
TITLE = "Rick Astley - Never Gonna Give You Up (Official Video)"


@pytest.fixture
def use_extractor():
    """Swap the deployment-selected engine for the duration of a test"""
    def install(extractor):
        app.dependency_overrides[get_extractor] = lambda: extractor
        return extractor

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def fake_ytdlp():
    """
    Stand-in for SubprocessExecutor.run.
    Title lookups print TITLE; downloads write `payload` to the -o template.
    """
    class FakeYtDlp:
        def __init__(self):
            self.commands = []
            self.payload = b"\x00media-bytes" * 1024
            self.returncode = 0
            self.stderr = b""
            self.title_returncode = 0
            self.partial = False
            self.write_output = True
            self.timeout = False

        async def run(self, cmd, timeout, capture_stderr=True):
            self.commands.append((cmd, timeout))
            if "--print" in cmd:
                return CompletedProcess(self.title_returncode, TITLE.encode() + b"\n", b"")

            template = cmd[cmd.index("-o") + 1]
            ext = "mp3" if "-x" in cmd else "mp4"
            if self.partial:
                with open(template.replace("%(ext)s", f"{ext}.part"), "wb") as f:
                    f.write(b"partial")
            if self.timeout:
                raise asyncio.TimeoutError()
            if self.write_output and self.returncode == 0:
                with open(template.replace("%(ext)s", ext), "wb") as f:
                    f.write(self.payload)
            return CompletedProcess(self.returncode, b"", self.stderr)

    return FakeYtDlp()
