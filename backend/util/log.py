import sys

from backend.config import LOG_LEVEL


COLORS = {
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "magenta": "\033[35m",
    "reset": "\033[0m",
}

LEVELS = {
    "debug": 10,
    "info": 20,
    "success": 20,
    "warn": 30,
    "error": 40,
}

LEVEL_COLORS = {
    "debug": "magenta",
    "info": "cyan",
    "success": "green",
    "warn": "yellow",
    "error": "red",
}


def _supports_color(stream) -> bool:
    """
    Skip ANSI codes when the target stream is not a TTY (pipes, pytest capture, log files).
    """
    return hasattr(stream, "isatty") and stream.isatty()


def _enabled(level: str, threshold: str = None) -> bool:
    threshold = LOG_LEVEL if threshold is None else threshold
    return LEVELS.get(level, 20) >= LEVELS.get(threshold, 20)


def colorize(message: str, color: str, stream=None) -> str:
    stream = stream or sys.stdout
    if not _supports_color(stream):
        return message
    code = COLORS.get(color, "")
    reset = COLORS["reset"] if code else ""
    return f"{code}{message}{reset}"


def log(message: str, level: str = "info"):
    if not _enabled(level):
        return
    # warnings and errors go to stderr so request logs stay greppable
    stream = sys.stderr if LEVELS.get(level, 20) >= LEVELS["warn"] else sys.stdout
    print(colorize(message, LEVEL_COLORS.get(level, "reset"), stream), file=stream)


def log_info(message: str):
    log(message, "info")


def log_success(message: str):
    log(message, "success")


def log_warn(message: str):
    log(message, "warn")


def log_error(message: str):
    log(message, "error")


def log_debug(message: str):
    log(message, "debug")
