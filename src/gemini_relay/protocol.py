"""The envelope contract and the shapes the upstream API can send back."""

import logging
from dataclasses import dataclass, asdict
from typing import Any

logger = logging.getLogger(__name__)

# The upstream sends its success flag as a string, not a boolean
UPSTREAM_OK = "true"

UPSTREAM_ERROR_REPLY = "Request error occurred"
NOT_FOUND_REPLY = "Endpoint not found"


@dataclass
class Envelope:
    """The only shape ever returned to a caller.

    `code` mirrors an HTTP status but is always a string. It is not the
    HTTP status of the response: upstream failures come back as HTTP 200
    with code "500", so callers must read the body.
    """

    code: str
    reply: Any = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def ok(cls, reply: Any) -> "Envelope":
        return cls(code="200", reply=reply)

    @classmethod
    def bad_request(cls, reply: str) -> "Envelope":
        return cls(code="400", reply=reply)

    @classmethod
    def not_found(cls) -> "Envelope":
        return cls(code="404", reply=NOT_FOUND_REPLY)

    @classmethod
    def upstream_error(cls) -> "Envelope":
        return cls(code="500", reply=UPSTREAM_ERROR_REPLY)


@dataclass
class UpstreamResult:
    """Upstream said status "true" and sent a result."""

    result: Any


@dataclass
class UpstreamMessage:
    """Upstream said anything other than "true" and sent a message."""

    status: Any
    message: Any


@dataclass
class UpstreamUnexpected:
    """Upstream sent JSON we don't recognise."""

    payload: Any


UpstreamReply = UpstreamResult | UpstreamMessage | UpstreamUnexpected


def parse_upstream(data: Any) -> UpstreamReply:
    """Sort a decoded upstream body into one of the known reply shapes.

    Only the `status` field is trusted. A body that isn't an object, or
    that lacks the field its status promises, is UpstreamUnexpected.
    """
    if not isinstance(data, dict):
        return UpstreamUnexpected(payload=data)

    status = data.get("status")
    if status == UPSTREAM_OK:
        if "result" not in data:
            return UpstreamUnexpected(payload=data)
        return UpstreamResult(result=data["result"])

    if "message" not in data:
        return UpstreamUnexpected(payload=data)
    return UpstreamMessage(status=status, message=data["message"])


def to_envelope(reply: UpstreamReply) -> Envelope:
    """Map a parsed upstream reply onto the local envelope.

    Upstream failures still get code "200"; the message is the reply.
    """
    if isinstance(reply, UpstreamResult):
        return Envelope.ok(reply.result)
    if isinstance(reply, UpstreamMessage):
        return Envelope.ok(reply.message)

    logger.warning(f"Unexpected upstream shape: {str(reply.payload)[:200]}")
    return Envelope.ok(None)
