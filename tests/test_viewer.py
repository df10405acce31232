import pyimgfx.viewer as viewer


def test_terminal_viewer_spawns_command(monkeypatch, tmp_path):
    calls = []

    class _FakePopen:
        def __init__(self, args):
            calls.append(args)

    monkeypatch.setattr(viewer.subprocess, "Popen", _FakePopen)

    proc = viewer.TerminalViewer().show(tmp_path / "out.png")
    assert isinstance(proc, _FakePopen)
    assert calls == [["viu", str(tmp_path / "out.png")]]


def test_build_viewer():
    assert isinstance(viewer.build_viewer(None), viewer.NullViewer)
    assert isinstance(viewer.build_viewer("  "), viewer.NullViewer)

    built = viewer.build_viewer("chafa")
    assert isinstance(built, viewer.TerminalViewer)
    assert built.command == "chafa"


def test_null_viewer_does_nothing(tmp_path):
    assert viewer.NullViewer().show(tmp_path / "out.png") is None
