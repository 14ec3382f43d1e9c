import importlib


def test_import_cli_entry_point() -> None:
    module = importlib.import_module("notifox_cli.cli")
    assert callable(module.main)


def test_import_notifications_package() -> None:
    module = importlib.import_module("services.notifications")
    assert hasattr(module, "send_alert")
    assert hasattr(module, "AlertDispatcher")
