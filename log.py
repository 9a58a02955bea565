import logging
import sys
from config import Config

# ANSI Colors for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    BOLD = "\033[1m"
    CYAN = "\033[36m"

class ConsoleFormatter(logging.Formatter):
    """Console formatting with colours and emoji level markers."""

    FORMATS = {
        logging.DEBUG:    "🐞",
        logging.INFO:     "ℹ️ ",
        logging.WARNING:  "⚠️ ",
        logging.ERROR:    "❌ ",
        logging.CRITICAL: "🔥 "
    }

    COLOR_MAP = {
        logging.DEBUG:    Colors.CYAN,
        logging.INFO:     Colors.GREEN,
        logging.WARNING:  Colors.YELLOW,
        logging.ERROR:    Colors.RED + Colors.BOLD,
        logging.CRITICAL: Colors.RED + Colors.BOLD
    }

    def format(self, record):
        emoji = self.FORMATS.get(record.levelno, "")
        color = self.COLOR_MAP.get(record.levelno, Colors.RESET)

        # Format: [TIME] [EMOJI] LEVEL :: MESSAGE
        log_fmt = (
            f"{Colors.BLUE}[%(asctime)s]{Colors.RESET} "
            f"{color}{emoji}%(levelname)-8s{Colors.RESET} :: "
            f"{color}%(message)s{Colors.RESET}"
        )

        formatter = logging.Formatter(log_fmt, datefmt="%H:%M:%S")
        return formatter.format(record)

# Plain format for the log file, no colour codes
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"

def get_logger(name):
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)

    if not logger.handlers:
        # Console Handler
        ch = logging.StreamHandler(sys.stdout)
        ch.setFormatter(ConsoleFormatter())
        logger.addHandler(ch)

        # Optional File Handler
        if Config.LOG_FILE:
            fh = logging.FileHandler(Config.LOG_FILE, encoding="utf-8")
            fh.setFormatter(logging.Formatter(FILE_FORMAT))
            logger.addHandler(fh)

    # Suppress verbose loggers
    logging.getLogger("pyrogram").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger
