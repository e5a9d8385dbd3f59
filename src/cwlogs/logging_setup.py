# Process-level logging configuration

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level="INFO"):
	"""Send cwlogs log records to stderr.

	stdout carries the MCP protocol stream and must stay clean.
	"""
	logger = logging.getLogger("cwlogs")
	if not logger.handlers:
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
		logger.addHandler(handler)
	logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
	logger.propagate = False
	return logger
