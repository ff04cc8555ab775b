import importlib
import sys
from pathlib import Path
from types import SimpleNamespace


def test_ui_imports():
    import PySide6
    from PySide6 import QtWidgets  # noqa: F401

    assert PySide6.__version__


def test_run_is_callable():
    from countdown_widget import run

    assert callable(run)


def test_lazy_exports_resolve_to_module_attributes():
    import countdown_widget
    from countdown_widget.duration_format import format_duration

    assert countdown_widget.format_duration is format_duration
    assert "CountdownScheduler" in dir(countdown_widget)


def test_unknown_export_raises_attribute_error():
    import countdown_widget

    try:
        countdown_widget.does_not_exist
    except AttributeError as exc:
        assert "does_not_exist" in str(exc)
    else:
        raise AssertionError("expected AttributeError")


def test_dunder_main_import_is_safe():
    module = importlib.import_module("countdown_widget.__main__")

    assert hasattr(module, "run")
    assert callable(module.run)


def test_dunder_main_run_supports_execution_without_package_context(monkeypatch):
    calls: list[str] = []
    source = Path("src/countdown_widget/__main__.py").read_text(encoding="utf-8")
    namespace = {"__name__": "frozen_entry", "__package__": None}
    fake_main = SimpleNamespace(run=lambda: calls.append("run"))

    monkeypatch.setitem(sys.modules, "countdown_widget.main", fake_main)

    exec(compile(source, "src/countdown_widget/__main__.py", "exec"), namespace)
    namespace["run"]()

    assert calls == ["run"]
