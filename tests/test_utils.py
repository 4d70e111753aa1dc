import json
import logging
import logging.handlers

import pytest

from utils import load_config, setup_logging


def test_load_config_fills_missing_sections(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"rain": {"seed": 3}}))
    config = load_config(str(path))
    assert config["rain"] == {"seed": 3}
    assert config["logging"] == {}
    assert config["display"] == {}
    assert config["run_control"] == {}


def test_missing_config_is_reraised(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_corrupt_config_is_reraised(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_config_must_be_an_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_setup_logging_writes_rotating_file(tmp_path, restore_root_logging):
    log_file = tmp_path / "logs" / "rain.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    logging.info("hello from the test")
    for handler in root.handlers:
        handler.flush()
    assert "hello from the test" in log_file.read_text()


def test_setup_logging_console_only(restore_root_logging):
    setup_logging({"logging": {"log_file": ""}})
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
