"""
Logging Configuration for the tax document engine.

Provides structured logging with:
- JSON formatting for production
- Human-readable formatting for development
- A per-calculation id stamped on every record of a calculation run
- Phase-by-phase calculation logging for audit trails
"""

import logging
import json
import sys
import time
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from contextvars import ContextVar

# Set by the unified calculator for the duration of one calculation
calculation_id_var: ContextVar[Optional[str]] = ContextVar('calculation_id', default=None)


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs logs as JSON objects for easy parsing by log aggregators.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        calculation_id = calculation_id_var.get()
        if calculation_id:
            log_data["calculation_id"] = calculation_id

        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ReadableFormatter(logging.Formatter):
    """
    Human-readable log formatter for development.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m',
    }

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human readability."""
        if self.use_color:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']
        else:
            color = reset = ''

        timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
        level = f"{color}{record.levelname:8s}{reset}"

        message = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if hasattr(record, 'extra_data') and record.extra_data:
            extras = ' | '.join(f"{k}={v}" for k, v in record.extra_data.items())
            message += f" | {extras}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that merges its bound context into every record's extra_data.
    """

    def process(self, msg: str, kwargs: Dict) -> tuple:
        extra = kwargs.get('extra', {})

        if 'extra_data' not in extra:
            extra['extra_data'] = {}
        extra['extra_data'].update(self.extra)

        calculation_id = calculation_id_var.get()
        if calculation_id:
            extra['extra_data'].setdefault('calculation_id', calculation_id)

        kwargs['extra'] = extra
        return msg, kwargs


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON formatted logs
        log_file: Optional file path for log output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = JsonFormatter() if json_output else ReadableFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter())  # Always JSON for files
        root_logger.addHandler(file_handler)


def configure_logging_from_settings() -> None:
    """Configure logging from LOG_* environment settings."""
    from config.settings import LoggingSettings

    log_settings = LoggingSettings()
    configure_logging(
        level=log_settings.level,
        json_output=log_settings.json_output,
        log_file=log_settings.file,
    )


def get_logger(name: str, **extra) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (typically __name__)
        **extra: Additional context to include in all logs

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), extra)


class CalculationLogger:
    """
    Specialized logger for the federal calculation pipeline.

    Records the inputs, every phase result (DEBUG) and the final
    outcome with per-phase timings (INFO).
    """

    def __init__(self, name: str = "calculation", **context):
        self.logger = get_logger(name, **context)
        self._start_time: Optional[float] = None
        self._last_mark: Optional[float] = None
        self._phase_times: Dict[str, int] = {}

    def start_calculation(self, tax_year: int, filing_status: str, **inputs) -> None:
        """Log calculation start."""
        self._start_time = self._last_mark = time.perf_counter()
        self._phase_times = {}
        self.logger.info(
            "Starting tax calculation",
            extra={'extra_data': {
                'tax_year': tax_year,
                'filing_status': filing_status,
                **inputs,
            }}
        )

    def log_phase(self, phase_name: str, **data: Any) -> None:
        """Log the outputs of one completed phase."""
        now = time.perf_counter()
        if self._last_mark is not None:
            self._phase_times[phase_name] = int((now - self._last_mark) * 1_000_000)
        self._last_mark = now
        self.logger.debug(
            f"Completed phase: {phase_name}",
            extra={'extra_data': {'phase': phase_name, **data}}
        )

    def log_result(
        self,
        total_tax: float,
        final_balance: float,
        final_status: str,
        effective_rate: float
    ) -> None:
        """Log final calculation result."""
        duration_ms = int((time.perf_counter() - self._start_time) * 1000) if self._start_time else 0

        self.logger.info(
            "Calculation complete",
            extra={'extra_data': {
                'total_tax': total_tax,
                'final_balance': final_balance,
                'final_status': final_status,
                'effective_rate': effective_rate,
                'duration_ms': duration_ms,
                'phase_times_us': dict(self._phase_times),
            }}
        )

    @property
    def phase_times(self) -> Dict[str, int]:
        return dict(self._phase_times)

    def log_warning(self, message: str, **data) -> None:
        """Log calculation warning."""
        self.logger.warning(message, extra={'extra_data': data})
