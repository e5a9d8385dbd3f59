# Configuration loading for cwlogs

import os

# Lazy load dotenv - only when config is first accessed
_dotenv_loaded = False
_custom_dotenv_path = None

REQUIRED_ENV_VARS = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION")


class ConfigError(Exception):
	"""Raised when required settings are missing at startup."""

	def __init__(self, missing):
		self.missing = list(missing)
		names = ", ".join(self.missing)
		noun = "variable" if len(self.missing) == 1 else "variables"
		super().__init__(f"Missing required environment {noun}: {names}")


def _getenv(name, default):
	value = os.getenv(name)
	return value if value else default


class CwlogsConfig:
	"""Loads configuration from environment variables and provides defaults."""
	def __init__(self):
		self.aws_access_key_id = _getenv("AWS_ACCESS_KEY_ID", None)
		self.aws_secret_access_key = _getenv("AWS_SECRET_ACCESS_KEY", None)
		self.aws_region = _getenv("AWS_REGION", None)
		self.aws_session_token = _getenv("AWS_SESSION_TOKEN", None)
		# Alternate endpoint, e.g. LocalStack
		self.endpoint_url = _getenv("CWLOGS_ENDPOINT_URL", None)
		self.timeout = int(_getenv("CWLOGS_TIMEOUT", "30"))
		self.max_attempts = int(_getenv("CWLOGS_MAX_ATTEMPTS", "3"))
		self.log_level = _getenv("CWLOGS_LOG_LEVEL", "INFO").upper()

	def missing_settings(self):
		values = {
			"AWS_ACCESS_KEY_ID": self.aws_access_key_id,
			"AWS_SECRET_ACCESS_KEY": self.aws_secret_access_key,
			"AWS_REGION": self.aws_region,
		}
		return [name for name in REQUIRED_ENV_VARS if not values[name]]


def set_dotenv_path(path: str):
	"""Set a custom .env file path to load. Must be called before load_config()."""
	global _custom_dotenv_path, _dotenv_loaded
	_custom_dotenv_path = path
	_dotenv_loaded = False  # Reset to force reload with new path


def load_config() -> CwlogsConfig:
	"""Return a config object with all settings loaded."""
	global _dotenv_loaded
	if not _dotenv_loaded:
		from dotenv import load_dotenv, find_dotenv
		# Check for DOTENV_PATH environment variable first
		dotenv_path = os.getenv("DOTENV_PATH") or _custom_dotenv_path
		if dotenv_path:
			# Explicit file wins over values already in the environment
			load_dotenv(dotenv_path, override=True)
		else:
			# Search for .env file in current directory and parents
			dotenv_path = find_dotenv(usecwd=True)
			if dotenv_path:
				load_dotenv(dotenv_path)
		_dotenv_loaded = True
	return CwlogsConfig()


def require_config() -> CwlogsConfig:
	"""Load config and fail fast if any required credential or region is absent."""
	cfg = load_config()
	missing = cfg.missing_settings()
	if missing:
		raise ConfigError(missing)
	return cfg
