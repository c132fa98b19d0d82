import sys

from loguru import logger

from navext.core.config import AppConfig, GeneralSettings, LoggingSettings
from navext.core.logging import LoggerFactory, setup_logging


def test_logger_factory_binds_category(log_records):
    factory = LoggerFactory(app="shop")

    factory.create_logger("NavigateToExtension").info("hello")

    record = log_records[-1]
    assert record["message"] == "hello"
    assert record["extra"]["category"] == "NavigateToExtension"
    assert record["extra"]["app"] == "shop"


def test_setup_logging_adds_file_sink(tmp_path):
    log_dir = tmp_path / "logs"
    config = AppConfig(
        general=GeneralSettings(app_name="shop", debug_mode=False),
        logging=LoggingSettings(log_dir=str(log_dir)),
    )

    try:
        setup_logging(config)
        logger.info("to file")
    finally:
        # Closing the sinks flushes the file; back to loguru defaults afterwards
        logger.remove()
        logger.add(sys.stderr)

    files = list(log_dir.glob("shop_*.log"))
    assert len(files) == 1
    assert "to file" in files[0].read_text(encoding="utf-8")
