import importlib
import json
import os
import sys

import pytest
from colorama import Fore

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no socket is ever opened.


@pytest.fixture()
def run_module():
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    from mazegen import __version__

    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    assert f"mazegen {__version__}" in capsys.readouterr().out


def test_default_command_is_generate(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "generate"
    assert ns.rooms == 5
    assert ns.format == "ascii"
    assert ns.size == "medium"


def test_generate_json(run_module, capsys):
    code = run_module.main(
        ["generate", "--columns", "50", "--rows", "67", "--rooms", "3", "--seed", "5", "--format", "json"]
    )
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 5
    assert (data["columns"], data["rows"]) == (50, 67)
    assert data["cell_size"] == 12


def test_generate_json_is_reproducible(run_module, capsys):
    argv = ["generate", "--columns", "40", "--rows", "40", "--seed", "dungeon", "--format", "json"]
    run_module.main(argv)
    first = json.loads(capsys.readouterr().out)
    run_module.main(argv)
    second = json.loads(capsys.readouterr().out)
    assert first["rooms"] == second["rooms"]


def test_generate_ascii_with_summary(run_module, capsys):
    code = run_module.main(["generate", "--columns", "30", "--rows", "20", "--rooms", "2", "--seed", "9"])
    assert code == 0
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(lines) == 21
    assert all(len(line) == 30 for line in lines[:20])
    assert lines[-1].startswith("seed=9 grid=30x20")
    # captured stdout is not a TTY, so no escape codes
    assert "\x1b[" not in "".join(lines)


def test_generate_from_size_preset(run_module, capsys):
    run_module.main(["generate", "--size", "large", "--seed", "1", "--format", "json"])
    data = json.loads(capsys.readouterr().out)
    assert (data["columns"], data["rows"]) == (125, 100)


def test_strict_tiny_grid_exits_2(run_module, capsys):
    code = run_module.main(["generate", "--columns", "3", "--rows", "3", "--strict"])
    assert code == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_columns_without_rows_exits_2(run_module, capsys):
    assert run_module.main(["generate", "--columns", "30"]) == 2
    assert "--rows" in capsys.readouterr().err


def test_unknown_preset_exits_2(run_module, capsys):
    assert run_module.main(["generate", "--size", "huge"]) == 2


def test_colorize_wraps_tiles(run_module):
    out = run_module.colorize("R.TD")
    assert Fore.MAGENTA + "R" in out
    assert Fore.YELLOW + "T" in out
    assert "." in out and Fore.RED in out


def test_no_color_flag(run_module):
    ns = run_module.parse_args(["generate", "--no-color"])
    assert run_module._color_enabled(ns) is False


def test_server_main_invokes_start_server(monkeypatch, run_module, capsys):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    import mazegen.server

    monkeypatch.setattr(mazegen.server, "start_server", fake_start_server)
    monkeypatch.setattr(run_module.signal, "signal", lambda *a, **k: None)
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    assert run_module.main(["server"]) == 0
    assert calls == {"host": "127.0.0.1", "port": 5555, "debug": False}
    out = capsys.readouterr().out
    assert "mazegen API" in out
    assert "event=startup" in out


def test_server_flags_override_env(monkeypatch, run_module):
    calls = {}
    import mazegen.server

    monkeypatch.setattr(mazegen.server, "start_server", lambda host, port, debug: calls.update(host=host, port=port))
    monkeypatch.setattr(run_module.signal, "signal", lambda *a, **k: None)
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--host", "localhost", "--port", "8080", "--debug"])
    assert calls == {"host": "localhost", "port": 8080}


def test_env_file_is_loaded(run_module, tmp_path, monkeypatch, capsys):
    env_file = tmp_path / "maze.env"
    env_file.write_text("MAZEGEN_MIN_ROOM_SIZE=5\nMAZEGEN_MAX_ROOM_SIZE=5\n")
    monkeypatch.delenv("MAZEGEN_MIN_ROOM_SIZE", raising=False)
    monkeypatch.delenv("MAZEGEN_MAX_ROOM_SIZE", raising=False)
    argv = ["--env-file", str(env_file), "generate", "--columns", "50", "--rows", "50", "--seed", "2", "--format", "json"]
    try:
        run_module.main(argv)
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop("MAZEGEN_MIN_ROOM_SIZE", None)
        os.environ.pop("MAZEGEN_MAX_ROOM_SIZE", None)
    data = json.loads(capsys.readouterr().out)
    assert data["rooms"]
    assert all(r["width"] == 5 and r["height"] == 5 for r in data["rooms"])
