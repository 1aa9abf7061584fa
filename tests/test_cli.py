import json
from typer.testing import CliRunner
from treegesturekit.cli import app

runner = CliRunner()

def _lines(out):
    return [json.loads(l) for l in out.splitlines() if l.startswith("{")]

def test_simulate_confirms_after_window():
    res = runner.invoke(app, ["simulate", "POINT", "POINT", "POINT", "POINT", "POINT", "--seed", "1"])
    assert res.exit_code == 0, res.output
    lines = _lines(res.output)
    assert lines[0]["type"] == "gesture" and lines[0]["mode"] == "PULLING_GIFT"
    assert lines[-1]["type"] == "status" and lines[-1]["targeted"].startswith("gift-")

def test_simulate_manual_and_ticks():
    res = runner.invoke(app, ["simulate", "PINCH", "--manual", "--ticks", "3", "--seed", "2"])
    assert res.exit_code == 0, res.output
    lines = _lines(res.output)
    assert lines[0]["source"] == "manual"
    assert lines[1]["targeted"] is True and lines[1]["category"] == "frame"

def test_simulate_rejects_unknown_label():
    res = runner.invoke(app, ["simulate", "WAVE"])
    assert res.exit_code != 0

def test_pool_lists_items():
    res = runner.invoke(app, ["pool", "--seed", "0"], env={"COLUMNS": "200"})
    assert res.exit_code == 0
    assert "gift-0" in res.output

def test_simulate_repeated_manual_label_emits_once():
    res = runner.invoke(app, ["simulate", "PINCH", "PINCH", "--manual", "--seed", "4"])
    assert res.exit_code == 0, res.output
    events = [l for l in _lines(res.output) if l["type"] == "gesture"]
    assert len(events) == 1 and events[0]["previous"] == "IDLE"
