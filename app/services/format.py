from app.models.internal import DownloadIntent, ExtractionOptions, MediaMetadata

AUDIO_METADATA = MediaMetadata(ext="mp3", content_type="audio/mpeg")
VIDEO_METADATA = MediaMetadata(ext="mp4", content_type="video/mp4")

class FormatDecision:
    """Make format decisions"""

    @staticmethod
    def options(intent: DownloadIntent) -> ExtractionOptions:
        """In-process extraction options: single track, no merging or transcoding"""
        if intent.audio_only:
            # Audio-only tracks, highest available audio; mp3 preferred when offered
            return ExtractionOptions(
                format_selector="bestaudio[ext=mp3]/bestaudio",
                quality="highestaudio",
                target_format="mp3",
            )

        # Muxed tracks only: mp4 container with both video and audio
        return ExtractionOptions(
            format_selector="best[ext=mp4][vcodec!=none][acodec!=none]",
            quality="highest",
            target_format="mp4",
        )

    @staticmethod
    def decide(intent: DownloadIntent) -> str:
        """Format string for the yt-dlp binary, which may merge and transcode"""
        if intent.audio_only:
            return "bestaudio/best"  # converted by -x --audio-format mp3

        return "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"

    @staticmethod
    def get_metadata(intent: DownloadIntent) -> MediaMetadata:
        """Get media metadata based on intent"""
        return AUDIO_METADATA if intent.audio_only else VIDEO_METADATA
