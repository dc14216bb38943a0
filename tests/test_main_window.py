import json

import pytest

from barchart3d.view import main_window
from barchart3d.view.main_window import MainWindow


@pytest.fixture
def errors(monkeypatch):
    """Records QMessageBox.critical calls instead of opening a modal dialog."""
    shown = []
    monkeypatch.setattr(
        main_window.QMessageBox, "critical",
        lambda parent, title, text: shown.append(text)
    )
    return shown


def _write_chart(path, options):
    path.write_text(json.dumps({
        "options": options,
        "data": [{"x": 1, "y": 10, "z": 20, "color": "#f00", "label": "A"}],
    }), encoding="utf-8")
    return str(path)


@pytest.fixture
def window(qapp):
    win = MainWindow()
    yield win
    win.close()


def test_valid_file_is_shown(window, errors, tmp_path):
    window.load_file(_write_chart(tmp_path / "sales.json", {"title": "Sales"}))

    assert errors == []
    assert window.windowTitle().endswith("sales.json")
    assert window.statusBar().currentMessage() == "1 bars"


def test_file_with_bad_options_shows_error(window, errors, tmp_path):
    window.load_file(_write_chart(tmp_path / "bad.json", {"legendItems": [{"color": "#f00"}]}))

    assert len(errors) == 1
    assert "invalid options" in errors[0]


def test_rejected_command_line_options_show_error(qapp, errors, tmp_path):
    win = MainWindow(extra_options={"colour": "red"})
    try:
        win.load_file(_write_chart(tmp_path / "chart.json", {}))
    finally:
        win.close()

    assert len(errors) == 1
    assert "Unknown chart option 'colour'" in errors[0]


def test_missing_file_shows_error(window, errors, tmp_path):
    window.load_file(str(tmp_path / "missing.json"))

    assert len(errors) == 1
    assert "does not exist" in errors[0]


def test_closing_window_disposes_click_subscription(qapp, errors, tmp_path):
    win = MainWindow()
    win.load_file(_write_chart(tmp_path / "chart.json", {}))
    subscription = win._click_subscription

    win.close()

    assert subscription is not None
    assert subscription.disposed
