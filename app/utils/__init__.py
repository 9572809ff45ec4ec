from .filename import build_filename, sanitize_title, sanitize_title_strict

__all__ = ["build_filename", "sanitize_title", "sanitize_title_strict"]
