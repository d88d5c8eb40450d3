import logging

import pytest

from jma_tide_pipeline.logger import app_logger


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _own_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, app_logger._HANDLER_MARK, False)]


def test_setup_logging_uses_logging_section(tmp_path, restore_root_handlers):
    log_file = tmp_path / "logs" / "app.log"
    app_logger.setup_logging({"logging": {"level": "debug", "file": str(log_file)}})

    app_logger.get_logger("jma_tide_pipeline.test").debug("デバッグ出力")

    assert logging.getLogger().level == logging.DEBUG
    assert log_file.exists()
    assert "デバッグ出力" in log_file.read_text(encoding="utf-8")


def test_setup_logging_twice_replaces_own_handlers(tmp_path, restore_root_handlers):
    config = {"logging": {"file": str(tmp_path / "app.log")}}
    app_logger.setup_logging(config)
    app_logger.setup_logging(config)

    assert len(_own_handlers()) == 2


def test_unknown_level_is_rejected(tmp_path, restore_root_handlers):
    with pytest.raises(ValueError):
        app_logger.setup_logging({"logging": {"level": "LOUD", "file": str(tmp_path / "app.log")}})
