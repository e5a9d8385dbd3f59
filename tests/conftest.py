import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
	sys.path.insert(0, SRC_DIR)

from cwlogs.cloudwatch.client import CloudWatchError


class RecordingBackend:
	"""Backend double that records calls and returns canned responses."""

	def __init__(self, responses=None, error=None):
		self.responses = responses or {}
		self.error = error
		self.calls = []

	def _respond(self, method, params):
		self.calls.append((method, params))
		if self.error is not None:
			raise self.error
		return self.responses.get(method, {})

	def describe_log_groups(self, **params):
		return self._respond("describe_log_groups", params)

	def describe_log_streams(self, **params):
		return self._respond("describe_log_streams", params)

	def get_log_events(self, **params):
		return self._respond("get_log_events", params)


@pytest.fixture
def make_backend():
	return RecordingBackend


@pytest.fixture
def backend():
	return RecordingBackend()


@pytest.fixture
def failing_backend():
	return RecordingBackend(error=CloudWatchError("ThrottlingException: Rate exceeded", code="ThrottlingException"))


@pytest.fixture
def clean_env(monkeypatch):
	"""Isolate config from the developer's environment and .env files."""
	from cwlogs import config
	for key in (
		"DOTENV_PATH",
		"AWS_ACCESS_KEY_ID",
		"AWS_SECRET_ACCESS_KEY",
		"AWS_REGION",
		"AWS_SESSION_TOKEN",
		"CWLOGS_ENDPOINT_URL",
		"CWLOGS_TIMEOUT",
		"CWLOGS_MAX_ATTEMPTS",
		"CWLOGS_LOG_LEVEL",
	):
		monkeypatch.delenv(key, raising=False)
	monkeypatch.setattr(config, "_dotenv_loaded", True)
	monkeypatch.setattr(config, "_custom_dotenv_path", None)
	return monkeypatch


@pytest.fixture
def aws_env(clean_env):
	clean_env.setenv("AWS_ACCESS_KEY_ID", "AKIDEXAMPLE")
	clean_env.setenv("AWS_SECRET_ACCESS_KEY", "secret")
	clean_env.setenv("AWS_REGION", "us-east-1")
	return clean_env
