from loguru import logger
import sys

from multistorage_azure_blob.config.settings import LoggingConfig


class LoggerManager:
    def __init__(self):
        self.console_sink_id = None
        self.file_sink_id = None

        # Always remove the default handler
        logger.remove()

    def enable_console(self, level: str = "INFO"):
        if self.console_sink_id is None:
            self.console_sink_id = logger.add(sys.stdout, level=level, colorize=True)

    def disable_console(self):
        if self.console_sink_id is not None:
            logger.remove(self.console_sink_id)
            self.console_sink_id = None

    def configure(self, config: LoggingConfig = None):
        """Apply a LoggingConfig: console at the configured level, plus an optional rotating file."""
        config = config or LoggingConfig()

        self.disable_console()
        self.enable_console(level=config.level)

        if self.file_sink_id is not None:
            logger.remove(self.file_sink_id)
            self.file_sink_id = None

        if config.enable_file_logging and config.log_file:
            self.file_sink_id = logger.add(
                config.log_file,
                level=config.level,
                rotation=config.max_file_size,
                retention=f"{config.retention_days} days",
            )

    def get_logger(self):
        return logger


log_manager = LoggerManager()
