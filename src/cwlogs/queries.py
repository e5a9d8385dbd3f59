# Structured, validated requests - one type per operation

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import InvalidArguments

DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ListLogGroupsRequest:
	limit: int = DEFAULT_LIMIT
	prefix: Optional[str] = None

	backend_method = "describe_log_groups"
	result_key = "logGroups"

	@classmethod
	def from_arguments(cls, values: Dict[str, Any]) -> "ListLogGroupsRequest":
		return cls(limit=values.get("limit", DEFAULT_LIMIT), prefix=values.get("prefix"))

	def to_params(self) -> Dict[str, Any]:
		params: Dict[str, Any] = {"limit": self.limit}
		if self.prefix is not None:
			params["logGroupNamePrefix"] = self.prefix
		return params


@dataclass(frozen=True)
class ListLogStreamsRequest:
	log_group_name: str
	limit: int = DEFAULT_LIMIT

	backend_method = "describe_log_streams"
	result_key = "logStreams"

	@classmethod
	def from_arguments(cls, values: Dict[str, Any]) -> "ListLogStreamsRequest":
		return cls(log_group_name=values["logGroupName"], limit=values.get("limit", DEFAULT_LIMIT))

	def to_params(self) -> Dict[str, Any]:
		# Most recently active streams first
		return {
			"logGroupName": self.log_group_name,
			"limit": self.limit,
			"orderBy": "LastEventTime",
			"descending": True,
		}


@dataclass(frozen=True)
class GetLogEventsRequest:
	log_group_name: str
	log_stream_name: str
	limit: int = DEFAULT_LIMIT
	start_time: Optional[int] = None
	end_time: Optional[int] = None

	backend_method = "get_log_events"
	result_key = "events"

	@classmethod
	def from_arguments(cls, values: Dict[str, Any]) -> "GetLogEventsRequest":
		start_time = values.get("startTime")
		end_time = values.get("endTime")
		if start_time is not None and end_time is not None and start_time > end_time:
			raise InvalidArguments(
				f"startTime ({start_time}) must not be after endTime ({end_time})",
				fields=["startTime", "endTime"],
			)
		return cls(
			log_group_name=values["logGroupName"],
			log_stream_name=values["logStreamName"],
			limit=values.get("limit", DEFAULT_LIMIT),
			start_time=start_time,
			end_time=end_time,
		)

	def to_params(self) -> Dict[str, Any]:
		params: Dict[str, Any] = {
			"logGroupName": self.log_group_name,
			"logStreamName": self.log_stream_name,
			"limit": self.limit,
		}
		if self.start_time is not None:
			params["startTime"] = self.start_time
		if self.end_time is not None:
			params["endTime"] = self.end_time
		return params
