"""
Central logging system for canvasdmx

Library modules only ever call get_logger(__name__). Handlers are installed
by the host through setup_logging(), so importing the package never touches
the filesystem.
"""
import fnmatch
import logging
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler

from ..constants import DEFAULT_LOG_DIR, DEFAULT_MAX_LOG_FILES, LOG_FILE_PREFIX


class CanvasDmxLogger:
    """Central logger with file and console output."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(CanvasDmxLogger, cls).__new__(cls)
            cls._instance.console_handler = None
            cls._instance.file_handler = None
            cls._instance.log_file = None
            cls._instance.module_log_levels = {}
        return cls._instance

    def _cleanup_old_logs(self, log_dir, max_files=DEFAULT_MAX_LOG_FILES):
        """
        Clean up old log files, keeping only the most recent ones.

        Args:
            log_dir: Path to log directory
            max_files: Maximum number of log files to keep (0 = keep all)
        """
        if max_files == 0:
            return

        log_files = sorted(
            log_dir.glob(f'{LOG_FILE_PREFIX}_*.log*'),
            key=lambda f: f.stat().st_mtime,
            reverse=True
        )

        for old_file in log_files[max_files:]:
            try:
                old_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Failed to delete {old_file.name}: {e}")

    def setup_logging(self, log_dir=DEFAULT_LOG_DIR, log_level=logging.INFO,
                      console_level=logging.WARNING, max_log_files=DEFAULT_MAX_LOG_FILES):
        """
        Install file and console handlers on the 'canvasdmx' logger.

        Args:
            log_dir: Directory for log files
            log_level: Level for the file handler
            console_level: Level for the console handler
            max_log_files: Maximum number of log files to keep (0 = keep all)

        Returns:
            Path of the new log file
        """
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        self._cleanup_old_logs(log_path, max_files=max_log_files)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        log_file = log_path / f'{LOG_FILE_PREFIX}_{timestamp}.log'

        package_logger = logging.getLogger('canvasdmx')
        package_logger.setLevel(min(log_level, console_level))

        self.close()

        detailed_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)-8s | %(name)s | %(message)s'
        )

        # File handler with rotation (max 10MB, 5 backups)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(detailed_formatter)
        package_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(console_formatter)
        package_logger.addHandler(console_handler)

        self.console_handler = console_handler
        self.file_handler = file_handler
        self.log_file = log_file

        # Startup banner goes to the file only
        package_logger.removeHandler(console_handler)
        package_logger.info("=" * 80)
        package_logger.info("canvasdmx logging started")
        package_logger.info(f"Log file: {log_file}")
        package_logger.info("=" * 80)
        package_logger.addHandler(console_handler)

        return log_file

    def close(self):
        """Detach and close the handlers installed by setup_logging()."""
        package_logger = logging.getLogger('canvasdmx')
        for handler in (self.file_handler, self.console_handler):
            if handler is not None:
                package_logger.removeHandler(handler)
                handler.close()
        self.file_handler = None
        self.console_handler = None

    def set_console_log_level(self, level):
        """
        Change the level of the console handler.

        Args:
            level: logging.DEBUG, logging.INFO, logging.WARNING, etc.
        """
        if self.console_handler is not None:
            self.console_handler.setLevel(level)
            logging.getLogger(__name__).debug(
                f"Console log level set to {logging.getLevelName(level)}"
            )

    def get_console_log_level(self):
        """
        Returns:
            int: Current console level (WARNING when logging is not set up)
        """
        if self.console_handler is not None:
            return self.console_handler.level
        return logging.WARNING

    def set_module_log_level(self, module_pattern, level=logging.DEBUG):
        """
        Set the level of every known logger matching a pattern.

        Args:
            module_pattern: Logger name or fnmatch pattern (e.g. 'canvasdmx.mapping.*')
            level: Log level
        """
        self.module_log_levels[module_pattern] = level

        for logger_name in list(logging.Logger.manager.loggerDict):
            if fnmatch.fnmatch(logger_name, module_pattern):
                logging.getLogger(logger_name).setLevel(level)
                logging.getLogger(__name__).info(
                    f"Module '{logger_name}' log level set to {logging.getLevelName(level)}"
                )

    def apply_debug_modules(self, debug_modules):
        """
        Enable DEBUG for a list of module patterns.

        Args:
            debug_modules: e.g. ['canvasdmx.mapping.*', 'canvasdmx.output.pixel_sampler']
        """
        if not debug_modules:
            return

        for module_pattern in debug_modules:
            self.set_module_log_level(module_pattern, logging.DEBUG)

        logging.getLogger(__name__).info(f"Debug enabled for modules: {', '.join(debug_modules)}")

    def get_module_log_levels(self):
        """
        Returns:
            dict: Module patterns and their levels
        """
        return self.module_log_levels.copy()


def get_logger(name):
    """
    Convenience function to fetch a named logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        logging.Logger
    """
    return logging.getLogger(name)


def setup_logging(**kwargs):
    """Install handlers via the CanvasDmxLogger singleton (see CanvasDmxLogger.setup_logging)."""
    return CanvasDmxLogger().setup_logging(**kwargs)


def set_console_log_level(level):
    CanvasDmxLogger().set_console_log_level(level)


def get_console_log_level():
    return CanvasDmxLogger().get_console_log_level()


# Structured logging helpers
def log_performance(logger, operation, duration_ms):
    """
    Log a timing measurement.

    Args:
        logger: Logger instance
        operation: Name of the operation
        duration_ms: Duration in milliseconds
    """
    if duration_ms > 1000:
        logger.warning(f"Performance: {operation} took {duration_ms:.2f}ms (>1s)")
    else:
        logger.debug(f"Performance: {operation} took {duration_ms:.2f}ms")


def log_mapping_result(logger, shape, start_index, count):
    """
    Log the outcome of a mapping call. Zero counts are degenerate geometry.

    Args:
        logger: Logger instance
        shape: Mapping helper name (strip, ring, polygon, ...)
        start_index: First LED index
        count: Number of LEDs assigned
    """
    if not DebugCategories.is_enabled(DebugCategories.MAPPING):
        return
    if count == 0:
        logger.debug(f"{shape}: degenerate geometry, no LEDs mapped at index {start_index}")
    else:
        logger.debug(f"{shape}: mapped {count} LEDs starting at index {start_index}")


def log_dmx_output(logger, start_channel, channel_count, first_values):
    """
    Log emitted DMX data.

    Args:
        logger: Logger instance
        start_channel: First channel number
        channel_count: Number of channels
        first_values: First few values for debugging
    """
    if not DebugCategories.is_enabled(DebugCategories.DMX):
        return
    values_str = ', '.join(str(v) for v in list(first_values)[:6])
    logger.debug(f"DMX from channel {start_channel}: {channel_count} channels [{values_str}...]")


class DebugCategories:
    """
    Debug categories for granular log control. Categories can be toggled at
    runtime; all of them are enabled until initialize() narrows the set.
    """

    MAPPING = 'mapping'          # LED map population
    SAMPLING = 'sampling'        # Pixel sampling
    DMX = 'dmx'                  # Channel emission / frame building
    SETTINGS = 'settings'        # Settings codec
    PERFORMANCE = 'performance'  # Timing

    ALL = (MAPPING, SAMPLING, DMX, SETTINGS, PERFORMANCE)

    _enabled_categories = set(ALL)

    @classmethod
    def initialize(cls, enabled_categories=None):
        """
        Args:
            enabled_categories: Categories to enable (None = all)
        """
        if enabled_categories is None:
            cls._enabled_categories = set(cls.ALL)
        else:
            cls._enabled_categories = set(enabled_categories)

    @classmethod
    def enable(cls, *categories):
        cls._enabled_categories.update(categories)

    @classmethod
    def disable(cls, *categories):
        cls._enabled_categories.difference_update(categories)

    @classmethod
    def is_enabled(cls, category):
        return category in cls._enabled_categories
