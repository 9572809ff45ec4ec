from dataclasses import dataclass

@dataclass
class RuntimeState:
    """Centralized runtime state, filled once at startup"""
    ytdlp_version: str = "unknown"

state = RuntimeState()
