import logging

import pytest

from synthetic_als.generator.logging_utils import configure_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_log_file_receives_records(tmp_path, restore_root):
    log_file = tmp_path / "logs" / "generator.log"
    configure_logging(logging.INFO, log_file)
    logging.getLogger("synthetic_als.test").info("hello from the generator")
    for h in restore_root.handlers:
        h.flush()
    text = log_file.read_text()
    assert "hello from the generator" in text
    assert "[INFO] synthetic_als.test:" in text


def test_level_applied_without_log_file(restore_root):
    configure_logging(logging.WARNING)
    assert restore_root.level == logging.WARNING
    assert not any(isinstance(h, logging.FileHandler) for h in restore_root.handlers)
