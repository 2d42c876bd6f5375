# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for argwire."""
import logging

logger: logging.Logger = logging.getLogger("argwire")
