import re

# ASCII-only classes: header values are latin-1 encoded
LIGHT_STRIP = re.compile(r"[^\w\s]", re.ASCII)
STRICT_STRIP = re.compile(r"[^\w\s.-]", re.ASCII)
WHITESPACE = re.compile(r"\s+", re.ASCII)


def sanitize_title(title: str, max_length: int = 200) -> str:
    """Keep word characters and spaces only"""
    name = LIGHT_STRIP.sub("", title)
    name = re.sub(r"[\t\n\r\f\v]", " ", name)
    return name[:max_length].strip()


def sanitize_title_strict(title: str, max_length: int = 200) -> str:
    """Keep word characters, dots and dashes; whitespace runs become underscores"""
    name = STRICT_STRIP.sub("", title).strip()
    name = WHITESPACE.sub("_", name)
    return name[:max_length]


def build_filename(title: str, ext: str, fallback: str, strict: bool = False) -> str:
    """Sanitized `<title>.<ext>`, falling back when nothing survives sanitizing"""
    stem = sanitize_title_strict(title) if strict else sanitize_title(title)
    return f"{stem or fallback}.{ext}"
