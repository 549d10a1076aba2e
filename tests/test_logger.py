import logging

from logger import get_logger


def file_paths(log):
    return [h.baseFilename for h in log.handlers if isinstance(h, logging.FileHandler)]


def test_explicit_log_file_replaces_default(tmp_path):
    name = "cabin_booking_test_swap"
    get_logger(name, log_file=str(tmp_path / "first.log"))
    log = get_logger(name, log_file=str(tmp_path / "mine.log"))

    assert file_paths(log) == [str(tmp_path / "mine.log")]
    log.info("hello")
    log.handlers[0].flush()
    assert "hello" in (tmp_path / "mine.log").read_text()


def test_no_log_file_keeps_current_handler(tmp_path):
    name = "cabin_booking_test_keep"
    get_logger(name, log_file=str(tmp_path / "kept.log"))
    log = get_logger(name)
    assert file_paths(log) == [str(tmp_path / "kept.log")]
