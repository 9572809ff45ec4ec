from typing import Any, Dict, List, NamedTuple
import asyncio
from app.config.settings import config
from app.models.internal import ExtractionOptions

class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes

class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: float,
        capture_stderr: bool = True
    ) -> CompletedProcess:
        """
        Run subprocess with timeout and proper cleanup.
        The process is killed and reaped before asyncio.TimeoutError propagates.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE if capture_stderr else asyncio.subprocess.DEVNULL,
            stdin=asyncio.subprocess.DEVNULL
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )

            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr if capture_stderr else b""
            )

        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        except BaseException:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

class YTDLPCommandBuilder:
    """Build yt-dlp commands"""

    @staticmethod
    def _base() -> List[str]:
        cmd = [
            config.ytdlp.binary,
            '--no-playlist',
            '--socket-timeout', str(config.download.socket_timeout),
        ]
        if config.ytdlp.no_update:
            cmd.append('--no-update')
        return cmd

    @staticmethod
    def build_title_command(url: str) -> List[str]:
        """Build command printing the video title only"""
        cmd = YTDLPCommandBuilder._base()
        cmd.extend(['--skip-download', '--print', 'title', url])
        return cmd

    @staticmethod
    def build_download_command(
        url: str,
        format_str: str,
        audio_only: bool,
        output_template: str
    ) -> List[str]:
        """Build command downloading into output_template"""
        cmd = YTDLPCommandBuilder._base()
        cmd.extend([
            '-f', format_str,
            '-o', output_template,
            '--no-progress',
            '--quiet',
        ])

        if audio_only:
            # Extract and transcode to mp3 at maximum quality
            cmd.extend(['-x', '--audio-format', 'mp3', '--audio-quality', '0'])
        else:
            cmd.extend(['--merge-output-format', 'mp4'])

        cmd.append(url)
        return cmd

def build_library_options(options: ExtractionOptions) -> Dict[str, Any]:
    """Options for the in-process yt_dlp.YoutubeDL instance"""
    return {
        "format": options.format_selector,
        "noplaylist": True,
        "quiet": True,
        "no_warnings": True,
        "skip_download": True,
        "socket_timeout": config.download.socket_timeout,
    }
