from app.utils.filename import build_filename, sanitize_title, sanitize_title_strict


def test_light_sanitize_keeps_words_and_spaces():
    assert sanitize_title("AC/DC - Back in Black (Live!)") == "ACDC  Back in Black Live"


def test_light_sanitize_flattens_control_whitespace():
    assert sanitize_title("line one\r\nline two") == "line one  line two"


def test_strict_sanitize_collapses_whitespace():
    assert sanitize_title_strict("  Lo-fi   beats v2.0 (1 hour)  ") == "Lo-fi_beats_v2.0_1_hour"


def test_non_ascii_is_dropped():
    assert sanitize_title("Café 東京") == "Caf"
    assert sanitize_title_strict("東京 night") == "night"


def test_build_filename_fallback():
    assert build_filename("???", "mp3", fallback="dQw4w9WgXcQ") == "dQw4w9WgXcQ.mp3"
    assert build_filename("Song  Title", "mp4", fallback="x", strict=True) == "Song_Title.mp4"
