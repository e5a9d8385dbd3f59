# Static catalog of the supported log-query operations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .queries import DEFAULT_LIMIT, GetLogEventsRequest, ListLogGroupsRequest, ListLogStreamsRequest
from .schema import NUMBER, STRING, ArgumentSpec


@dataclass(frozen=True)
class Operation:
	"""A named, schema-described capability exposed to callers."""
	name: str
	description: str
	arguments: Tuple[ArgumentSpec, ...]
	request_type: type

	def input_schema(self) -> Dict[str, Any]:
		schema: Dict[str, Any] = {
			"type": "object",
			"properties": {spec.name: spec.json_schema() for spec in self.arguments},
		}
		required = [spec.name for spec in self.arguments if spec.required]
		if required:
			schema["required"] = required
		return schema

	def describe(self) -> Dict[str, Any]:
		return {
			"name": self.name,
			"description": self.description,
			"inputSchema": self.input_schema(),
		}


_LOG_GROUP_NAME = ArgumentSpec("logGroupName", STRING, "Name of the log group", required=True)

OPERATIONS: Tuple[Operation, ...] = (
	Operation(
		name="list_log_groups",
		description="List CloudWatch Log Groups",
		arguments=(
			ArgumentSpec("prefix", STRING, "Log group name prefix filter"),
			ArgumentSpec(
				"limit", NUMBER, "Maximum number of log groups to return",
				minimum=1, maximum=50, default=DEFAULT_LIMIT,
			),
		),
		request_type=ListLogGroupsRequest,
	),
	Operation(
		name="list_log_streams",
		description="List CloudWatch Log Streams in a Log Group",
		arguments=(
			_LOG_GROUP_NAME,
			ArgumentSpec(
				"limit", NUMBER, "Maximum number of log streams to return",
				minimum=1, maximum=50, default=DEFAULT_LIMIT,
			),
		),
		request_type=ListLogStreamsRequest,
	),
	Operation(
		name="get_log_events",
		description="Get log events from a log stream",
		arguments=(
			_LOG_GROUP_NAME,
			ArgumentSpec("logStreamName", STRING, "Name of the log stream", required=True),
			ArgumentSpec(
				"limit", NUMBER, "Maximum number of log events to return",
				minimum=1, maximum=100, default=DEFAULT_LIMIT,
			),
			ArgumentSpec("startTime", NUMBER, "Start time in milliseconds since epoch"),
			ArgumentSpec("endTime", NUMBER, "End time in milliseconds since epoch"),
		),
		request_type=GetLogEventsRequest,
	),
)

_BY_NAME: Dict[str, Operation] = {op.name: op for op in OPERATIONS}


def list_operations() -> Tuple[Operation, ...]:
	"""Return the operations in catalog order."""
	return OPERATIONS


def get_operation(name: str) -> Optional[Operation]:
	return _BY_NAME.get(name)
