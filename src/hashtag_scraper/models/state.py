"""Operation state variants held by the request orchestrator."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

# Scalar values a scraped record may carry
RecordValue = Union[str, int, float, bool, None]

# One scraped post: an open mapping of field name to scalar value
Record = dict[str, RecordValue]

# Read-only view of a record once it is held in a state
FrozenRecord = Annotated[
    Record,
    AfterValidator(lambda record: MappingProxyType(dict(record))),
    PlainSerializer(dict),
]


class ErrorKind(str, Enum):
    """Classification of a failed operation."""

    TRANSPORT = "transport"
    REMOTE_REJECTED = "remote_rejected"
    APPLICATION_ERROR = "application_error"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_INPUT = "empty_input"


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)


class Idle(_State):
    """No request has been issued yet."""

    status: Literal["idle"] = "idle"


class InFlight(_State):
    """A request was sent and its response is awaited."""

    status: Literal["in_flight"] = "in_flight"
    search_term: str = Field(description="Hashtag being scraped")
    submitted_at: datetime = Field(default_factory=datetime.now)


class Succeeded(_State):
    """Terminal state holding the records returned by the service."""

    status: Literal["succeeded"] = "succeeded"
    records: tuple[FrozenRecord, ...] = Field(description="Records in the order received")
    completed_at: datetime = Field(default_factory=datetime.now)


class Failed(_State):
    """Terminal state describing why the operation failed."""

    status: Literal["failed"] = "failed"
    reason: ErrorKind
    message: str
    status_code: int | None = Field(
        default=None, description="HTTP status code for rejected requests"
    )
    completed_at: datetime = Field(default_factory=datetime.now)


OperationState = Annotated[
    Union[Idle, InFlight, Succeeded, Failed],
    Field(discriminator="status"),
]
