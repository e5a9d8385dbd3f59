# CloudWatch Logs client factory and error translation

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError

from ..config import load_config

logger = logging.getLogger(__name__)

_AUTH_ERROR_CODES = {
	"AccessDeniedException",
	"UnrecognizedClientException",
	"InvalidSignatureException",
	"ExpiredTokenException",
}


class LogsBackendError(Exception):
	"""Base exception for log backend failures."""

	def __init__(self, message, code=None):
		super().__init__(message)
		self.message = message
		self.code = code


class CloudWatchError(LogsBackendError):
	"""Raised when a CloudWatch Logs call fails for any reason."""
	pass


class ConnectionFailedError(CloudWatchError):
	"""Raised when the CloudWatch Logs endpoint is not reachable."""
	pass


class AuthenticationError(CloudWatchError):
	"""Raised when the configured credentials are rejected."""
	pass


def _translate(exc):
	if isinstance(exc, ClientError):
		code = exc.response.get("Error", {}).get("Code")
		return CloudWatchError(str(exc), code=code)
	if isinstance(exc, EndpointConnectionError):
		return ConnectionFailedError(str(exc))
	return CloudWatchError(str(exc))


class CloudWatchLogsClient:
	"""Thin wrapper over a boto3 ``logs`` client.

	Each method makes exactly one API call and returns the raw response
	mapping. botocore failures are re-raised as CloudWatchError with the
	original message intact.
	"""

	def __init__(self, logs_client):
		self._client = logs_client

	def _call(self, method, params):
		logger.debug("CloudWatch Logs %s %s", method, params)
		try:
			return getattr(self._client, method)(**params)
		except (ClientError, BotoCoreError) as e:
			raise _translate(e) from e

	def describe_log_groups(self, **params):
		return self._call("describe_log_groups", params)

	def describe_log_streams(self, **params):
		return self._call("describe_log_streams", params)

	def get_log_events(self, **params):
		return self._call("get_log_events", params)


def get_cloudwatch_client(cfg=None):
	"""Build a client handle from explicit credentials and region."""
	cfg = cfg or load_config()
	session = boto3.Session(
		aws_access_key_id=cfg.aws_access_key_id,
		aws_secret_access_key=cfg.aws_secret_access_key,
		aws_session_token=cfg.aws_session_token,
		region_name=cfg.aws_region,
	)
	logs = session.client(
		"logs",
		endpoint_url=cfg.endpoint_url,
		config=Config(
			connect_timeout=cfg.timeout,
			read_timeout=cfg.timeout,
			retries={"max_attempts": cfg.max_attempts, "mode": "standard"},
		),
	)
	return CloudWatchLogsClient(logs)


def check_connection(client, cfg=None):
	"""Check that CloudWatch Logs is reachable with the configured credentials."""
	cfg = cfg or load_config()
	try:
		client.describe_log_groups(limit=1)
	except ConnectionFailedError:
		raise ConnectionFailedError(
			f"Cannot connect to CloudWatch Logs in region {cfg.aws_region}\n"
			f"Check network access and CWLOGS_ENDPOINT_URL if set."
		)
	except CloudWatchError as e:
		if e.code in _AUTH_ERROR_CODES:
			raise AuthenticationError(
				f"Authentication failed for CloudWatch Logs in region {cfg.aws_region}\n"
				f"Check AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY in your .env file.",
				code=e.code,
			)
		raise
