"""
Type definitions for Algolia operations
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum

from .constants import (
    INDEX_NAME_ATTRIBUTE, OBJECT_ID_ATTRIBUTE, TASK_ID_ATTRIBUTE
)
from .exceptions import (
    AlgoliaHTTPError, AlgoliaUnreachableError, ValidationError
)


class Mode(str, Enum):
    """Class of host a request targets"""
    READ = "read"
    WRITE = "write"


class MultiQueryStrategy(str, Enum):
    """Strategy for multiple queries"""
    NONE = "none"
    STOP_IF_ENOUGH_MATCHES = "stopIfEnoughMatches"


class LogType(str, Enum):
    """Log entry types"""
    ALL = "all"
    QUERY = "query"
    BUILD = "build"
    ERROR = "error"


@dataclass(frozen=True)
class RequestOptions:
    """Per-request options"""
    headers: List[Tuple[str, str]] = field(default_factory=list)

    RECOGNIZED_KEYS = ("headers",)

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "RequestOptions":
        """
        Build options from a plain mapping

        Args:
            options: Mapping with recognized keys only

        Returns:
            RequestOptions instance

        Raises:
            ValidationError: On unknown keys
        """
        unknown = sorted(set(options) - set(cls.RECOGNIZED_KEYS))
        if unknown:
            raise ValidationError(
                f"Unknown request options: {', '.join(unknown)}",
                "request_options"
            )

        headers = options.get("headers") or []
        if isinstance(headers, Mapping):
            headers = list(headers.items())

        return cls(headers=[(str(name), str(value)) for name, value in headers])


@dataclass(frozen=True)
class Request:
    """A single logical request, built fresh for every call"""
    method: str
    path: str
    body: Optional[str] = None
    options: RequestOptions = field(default_factory=RequestOptions)


@dataclass
class Record:
    """A record with an explicit identifier"""
    attributes: Dict[str, Any]
    object_id: Optional[str] = None

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        id_attribute: str = OBJECT_ID_ATTRIBUTE
    ) -> "Record":
        """Build a record, taking its identifier from ``id_attribute``"""
        object_id = data.get(id_attribute)
        return cls(
            attributes=dict(data),
            object_id=str(object_id) if object_id is not None else None
        )

    def to_dict(self) -> Dict[str, Any]:
        """Body sent to the API, with objectID set when known"""
        body = dict(self.attributes)
        if self.object_id is not None:
            body[OBJECT_ID_ATTRIBUTE] = self.object_id
        return body


@dataclass(frozen=True)
class TaskReference:
    """Index name and task id returned by a write operation"""
    index_name: str
    task_id: Union[int, str]

    @classmethod
    def from_result(cls, result: "Result") -> Optional["TaskReference"]:
        """Extract a task reference from a successful write result"""
        if not isinstance(result, Success) or not isinstance(result.body, dict):
            return None

        index_name = result.body.get(INDEX_NAME_ATTRIBUTE)
        task_id = result.body.get(TASK_ID_ATTRIBUTE)
        if index_name is None or task_id is None:
            return None

        return cls(index_name=index_name, task_id=task_id)


@dataclass(frozen=True)
class Success:
    """Decoded body of a 2xx response"""
    body: Any

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.body


@dataclass(frozen=True)
class HttpError:
    """The service answered with a non-2xx status"""
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise AlgoliaHTTPError(self.status_code, self.body)


@dataclass(frozen=True)
class TransportFailure:
    """Every host failed at the transport level"""
    message: str
    attempts: int
    cause: Optional[BaseException] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise AlgoliaUnreachableError(self.message, self.attempts, self.cause)


Result = Union[Success, HttpError, TransportFailure]
