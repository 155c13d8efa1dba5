import json
import logging
import sys

import pytest

from dovemark.cli import main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    # Keep a stray dovemark.toml from leaking into the run.
    monkeypatch.chdir(tmp_path)
    yield
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


def test_main_prints_marking_table(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["dovemark"])
    main()
    out = capsys.readouterr().out

    assert "Board width: 300 mm" in out
    assert "Angle: 10˚ (≈1:6)" in out
    assert "Pins: 4 + 2 half-pins, tails: 5" in out
    assert "Step 2:" in out
    rows = [line for line in out.splitlines() if " tail " in line]
    assert len(rows) == 20
    assert sum(row.startswith("*") for row in rows) == 10
    assert any("↓" in row and "(↑" in row for row in rows)


def test_main_imperial_table(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["dovemark", "--imperial"])
    main()
    out = capsys.readouterr().out
    assert "Board width: 12″" in out
    assert "Board thickness: 1″" in out


def test_main_json_output(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["dovemark", "--format", "json", "--angle-deg", "0"])
    main()
    payload = json.loads(capsys.readouterr().out)

    assert len(payload["pin_points"]) == len(payload["tail_points"]) + 1
    assert payload["pin_narrowing"] == 0.0
    assert payload["tail_board_outline"][0] == [0.0, 0.0]
    assert payload["tail_board_outline"][-1] == [0.0, 300.0]
    assert len(payload["tail_widths"]) == len(payload["tail_points"])


def test_main_rejects_invalid_config(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["dovemark", "--no-clamp", "--density", "0"])
    with pytest.raises(SystemExit):
        main()
    assert "ERROR: density" in capsys.readouterr().out


def test_main_warns_on_degenerate_layout(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["dovemark", "--no-clamp", "--width-mm", "5"])
    main()
    captured = capsys.readouterr()
    assert "Pins: 0 + 2 half-pins, tails: 1" in captured.out
    assert "WARNING" in captured.err
