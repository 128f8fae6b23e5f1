"""
Unit tests for the logging configuration.
"""

import logging
import logging.config

from pomodoro.logging_config import HealthCheckFilter, get_logging_config


def make_record(name, msg):
    return logging.LogRecord(name, logging.INFO, __file__, 1, msg, None, None)


def test_health_check_access_logs_suppressed():
    f = HealthCheckFilter()
    assert f.filter(make_record("uvicorn.access", '127.0.0.1 - "GET /health HTTP/1.1" 200')) is False
    assert f.filter(make_record("uvicorn.access", '127.0.0.1 - "GET /healthz HTTP/1.1" 200')) is False


def test_other_logs_pass():
    f = HealthCheckFilter()
    assert f.filter(make_record("uvicorn.access", '127.0.0.1 - "GET /sessions HTTP/1.1" 200')) is True
    assert f.filter(make_record("pomodoro.session", "GET /health")) is True


def test_level_applies_to_app_logger():
    config = get_logging_config("debug")
    assert config["loggers"]["pomodoro"]["level"] == "DEBUG"
    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["uvicorn.access"]["handlers"] == ["access"]


def test_config_is_accepted_by_dictconfig():
    logging.config.dictConfig(get_logging_config())
    assert logging.getLogger("pomodoro").propagate is False
