import logging

from ff.log import LOGGER_NAME, setup_logger


def test_setup_logger_replaces_handlers():
    logger = setup_logger()
    setup_logger()
    assert logger.name == LOGGER_NAME
    assert len(logger.handlers) == 1


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "ff.log"
    logger = setup_logger(level=logging.WARNING, log_file=log_file)
    logging.getLogger("ff.files").debug("write something")
    for handler in logger.handlers:
        handler.flush()
    assert "write something" in log_file.read_text(encoding="utf-8")
    setup_logger()
