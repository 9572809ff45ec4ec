import asyncio
import sys

import pytest

from app.models.internal import DownloadIntent, MediaType
from app.services.format import FormatDecision
from app.services.ytdlp import SubprocessExecutor, YTDLPCommandBuilder, build_library_options

AUDIO = DownloadIntent(video_id="dQw4w9WgXcQ", media_type=MediaType.AUDIO)
VIDEO = DownloadIntent(video_id="dQw4w9WgXcQ", media_type=MediaType.VIDEO)


def test_metadata():
    assert FormatDecision.get_metadata(AUDIO).content_type == "audio/mpeg"
    assert FormatDecision.get_metadata(AUDIO).ext == "mp3"
    assert FormatDecision.get_metadata(VIDEO).content_type == "video/mp4"
    assert FormatDecision.get_metadata(VIDEO).ext == "mp4"


def test_library_options():
    audio = FormatDecision.options(AUDIO)
    assert (audio.quality, audio.target_format) == ("highestaudio", "mp3")

    opts = build_library_options(FormatDecision.options(VIDEO))
    assert opts["format"] == "best[ext=mp4][vcodec!=none][acodec!=none]"
    assert opts["noplaylist"] is True


def test_audio_download_command():
    cmd = YTDLPCommandBuilder.build_download_command(
        AUDIO.url, FormatDecision.decide(AUDIO), True, "/tmp/x/dQw4w9WgXcQ.%(ext)s"
    )
    assert cmd[0] == "yt-dlp"
    assert cmd[cmd.index("-f") + 1] == "bestaudio/best"
    assert cmd[cmd.index("-o") + 1] == "/tmp/x/dQw4w9WgXcQ.%(ext)s"
    assert cmd[cmd.index("--audio-format") + 1] == "mp3"
    assert cmd[cmd.index("--audio-quality") + 1] == "0"
    assert "--no-update" in cmd
    assert cmd[-1] == AUDIO.url


def test_video_download_command():
    cmd = YTDLPCommandBuilder.build_download_command(
        VIDEO.url, FormatDecision.decide(VIDEO), False, "out.%(ext)s"
    )
    assert "-x" not in cmd
    assert cmd[cmd.index("-f") + 1].startswith("bestvideo[ext=mp4]+bestaudio")
    assert cmd[cmd.index("--merge-output-format") + 1] == "mp4"


def test_title_command():
    cmd = YTDLPCommandBuilder.build_title_command(VIDEO.url)
    assert cmd[cmd.index("--print") + 1] == "title"
    assert "--skip-download" in cmd


@pytest.mark.asyncio
async def test_executor_collects_output():
    result = await SubprocessExecutor.run([sys.executable, "-c", "print('ok')"], timeout=10)
    assert result.returncode == 0
    assert result.stdout.strip() == b"ok"


@pytest.mark.asyncio
async def test_executor_times_out():
    with pytest.raises(asyncio.TimeoutError):
        await SubprocessExecutor.run([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)
