import logging
from logging.handlers import RotatingFileHandler

import pytest

from external_links_api.app.core.logging_config import (
    CONSOLE_HANDLER_NAME,
    FILE_HANDLER_NAME,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    access = logging.getLogger("uvicorn.access")
    saved_handlers, saved_level, saved_access_level = list(root.handlers), root.level, access.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
    access.setLevel(saved_access_level)


def own_handlers(root):
    return [h for h in root.handlers if h.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME)]


def test_file_handler_rotates_and_receives_records(tmp_path):
    logfile = tmp_path / "logs" / "api.log"

    root = setup_logging("INFO", str(logfile), max_bytes=1024, backup_count=2)
    logging.getLogger("external_links_api.test").info("link created")
    for handler in root.handlers:
        handler.flush()

    file_handlers = [h for h in root.handlers if h.get_name() == FILE_HANDLER_NAME]
    assert len(file_handlers) == 1
    assert isinstance(file_handlers[0], RotatingFileHandler)
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2
    assert "[INFO] external_links_api.test: link created" in logfile.read_text(encoding="utf-8")


def test_repeated_setup_replaces_own_handlers(tmp_path):
    setup_logging("INFO", str(tmp_path / "a.log"))
    root = setup_logging("WARNING", str(tmp_path / "b.log"))

    names = sorted(h.get_name() for h in own_handlers(root))
    assert names == [CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME]
    assert root.level == logging.WARNING


def test_foreign_handlers_are_kept():
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)

    setup_logging("INFO")

    assert foreign in root.handlers


def test_access_log_quieted_unless_debug():
    setup_logging("INFO")
    assert logging.getLogger("uvicorn.access").level == logging.WARNING

    setup_logging("DEBUG")
    assert logging.getLogger("uvicorn.access").level == logging.NOTSET


def test_unknown_level_falls_back_to_info():
    root = setup_logging("chatty")

    assert root.level == logging.INFO
