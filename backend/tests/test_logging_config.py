from satellite_tracking.config import settings
from satellite_tracking.utils.logging_config import CorrelationFilter, get_logging_config


def test_console_only_by_default(monkeypatch):
    monkeypatch.setattr(settings, "log_file", None)

    config = get_logging_config()

    assert list(config["handlers"]) == ["console"]
    assert config["loggers"]["satellite_tracking"]["handlers"] == ["console"]


def test_file_handler_when_log_file_set(monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "server.log"
    monkeypatch.setattr(settings, "log_file", str(log_file))
    monkeypatch.setattr(settings, "log_level", "debug")

    config = get_logging_config()

    assert config["handlers"]["file"]["filename"] == str(log_file)
    assert config["handlers"]["file"]["level"] == "DEBUG"
    assert config["loggers"]["satellite_tracking"]["handlers"] == ["console", "file"]
    assert log_file.parent.is_dir()


def test_correlation_filter_sets_default():
    import logging

    record = logging.LogRecord("satellite_tracking", logging.INFO, __file__, 1, "hello", None, None)

    assert CorrelationFilter().filter(record) is True
    assert record.correlation_id == "N/A"
