from app.utils.workspace import Workspace, ensure_dir


def test_workspaces_are_request_scoped(tmp_path):
    first = Workspace(str(tmp_path), "dQw4w9WgXcQ").create()
    second = Workspace(str(tmp_path), "dQw4w9WgXcQ").create()
    (tmp_path / first.path / "dQw4w9WgXcQ.mp4").write_bytes(b"one")

    assert first.path != second.path
    assert second.find() == []
    assert [p.endswith("dQw4w9WgXcQ.mp4") for p in first.find()] == [True]


def test_purge_only_touches_prefix(tmp_path):
    ws = Workspace(str(tmp_path), "dQw4w9WgXcQ").create()
    for name in ("dQw4w9WgXcQ.webm.part", "dQw4w9WgXcQ.mp4", "other.txt"):
        (tmp_path / ws.path / name).write_bytes(b"x")

    assert ws.purge() == 2
    assert sorted(p.name for p in (tmp_path / ws.path).iterdir()) == ["other.txt"]


def test_remove_is_idempotent(tmp_path):
    ws = Workspace(str(tmp_path), "dQw4w9WgXcQ").create()
    ws.remove()
    ws.remove()
    assert list(tmp_path.iterdir()) == []
    assert ws.find() == []


def test_ensure_dir_creates_missing(tmp_path):
    path = ensure_dir(str(tmp_path / "temp"))
    assert (tmp_path / "temp").is_dir()
    assert path == str(tmp_path / "temp")
