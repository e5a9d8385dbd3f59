import signal
import sys

# Handle Ctrl+C gracefully before any other imports
signal.signal(signal.SIGINT, lambda *_: sys.exit(130))

import asyncio
import json

import click
import typer

from .cloudwatch.client import CloudWatchError, check_connection, get_cloudwatch_client
from .config import ConfigError, require_config, set_dotenv_path
from .dispatch import Dispatcher
from .errors import DispatchError
from .logging_setup import configure_logging
from .operations import list_operations

app = typer.Typer()


@app.callback()
def _main_options(
	env: str = typer.Option(None, "--env", help="Load settings from this .env file"),
):
	"""Query CloudWatch Logs from the command line or over MCP."""
	if env:
		set_dotenv_path(env)


def _fail(message):
	typer.echo(typer.style(f"Error: {message}", fg=typer.colors.RED), err=True)
	raise typer.Exit(1)


def require_backend():
	"""Load config and build the CloudWatch client, exiting on missing settings."""
	try:
		cfg = require_config()
	except ConfigError as e:
		_fail(e)
	configure_logging(cfg.log_level)
	return get_cloudwatch_client(cfg), cfg


def _run(operation_name, arguments):
	client, _ = require_backend()
	try:
		envelope = Dispatcher(client).dispatch(operation_name, arguments)
	except DispatchError as e:
		_fail(f"{e.kind.value}: {e.message}")
	typer.echo(envelope.text)


@app.command()
def tools():
	"""Print the operation catalog as JSON."""
	typer.echo(json.dumps([op.describe() for op in list_operations()], indent=2))


@app.command()
def groups(
	prefix: str = typer.Option(None, "--prefix", help="Log group name prefix filter"),
	limit: int = typer.Option(None, "--limit", help="Maximum number of log groups (1-50)"),
):
	"""List log groups."""
	_run("list_log_groups", {"prefix": prefix, "limit": limit})


@app.command()
def streams(
	log_group_name: str = typer.Argument(..., help="Name of the log group"),
	limit: int = typer.Option(None, "--limit", help="Maximum number of log streams (1-50)"),
):
	"""List log streams in a log group, most recently active first."""
	_run("list_log_streams", {"logGroupName": log_group_name, "limit": limit})


@app.command()
def events(
	log_group_name: str = typer.Argument(..., help="Name of the log group"),
	log_stream_name: str = typer.Argument(..., help="Name of the log stream"),
	limit: int = typer.Option(None, "--limit", help="Maximum number of log events (1-100)"),
	start: int = typer.Option(None, "--start", help="Start time in milliseconds since epoch"),
	end: int = typer.Option(None, "--end", help="End time in milliseconds since epoch"),
):
	"""Get log events from a log stream."""
	_run("get_log_events", {
		"logGroupName": log_group_name,
		"logStreamName": log_stream_name,
		"limit": limit,
		"startTime": start,
		"endTime": end,
	})


@app.command()
def check():
	"""Verify credentials and connectivity to CloudWatch Logs."""
	client, cfg = require_backend()
	try:
		check_connection(client, cfg)
	except CloudWatchError as e:
		_fail(e)
	typer.echo(f"Connected to CloudWatch Logs in {cfg.aws_region}.")


@app.command()
def serve():
	"""Run the MCP server on stdio."""
	from .mcp.server import serve as serve_stdio

	client, _ = require_backend()
	asyncio.run(serve_stdio(Dispatcher(client)))


def main():
	if len(sys.argv) == 1:
		# No arguments: show help
		command = typer.main.get_command(app)
		ctx = click.Context(command)
		typer.echo(command.get_help(ctx), err=True)
		return 0
	try:
		app()
	except typer.Exit:
		raise
	except Exception as e:
		typer.echo(typer.style(
			f"Fatal error: {type(e).__name__}: {e}",
			fg=typer.colors.RED
		), err=True)
		sys.exit(1)

if __name__ == "__main__":
	main()
