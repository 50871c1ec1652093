"""
Panel message protocol.

Inbound messages come from the panel UI; outbound messages go back to it.
Every message is a JSON object with a "type" field.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field, TypeAdapter, ValidationError

from ...core.exceptions import InvalidMessageError
from ...core.models.base import ShipitBaseModel
from ...core.models.deploy import DeployReport, DeployTarget


class PanelMessage(ShipitBaseModel):
    """Base for protocol messages."""

    model_config = ConfigDict(strict=False, frozen=True, extra="ignore", use_enum_values=False)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# -----------------------------------------------------------------------------
# Inbound
# -----------------------------------------------------------------------------


class RequestStatus(PanelMessage):
    type: Literal["requestStatus"] = "requestStatus"


class SaveToken(PanelMessage):
    type: Literal["saveToken"] = "saveToken"
    token: str | None = None


class ClearToken(PanelMessage):
    type: Literal["clearToken"] = "clearToken"


class Preview(PanelMessage):
    type: Literal["preview"] = "preview"
    file: str | None = None


class Deploy(PanelMessage):
    type: Literal["deploy"] = "deploy"
    targets: list[DeployTarget] = Field(default_factory=list)
    files: list[str] | None = None
    token: str | None = None


InboundMessage = Annotated[
    Union[RequestStatus, SaveToken, ClearToken, Preview, Deploy],
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_message(raw: str | bytes | dict) -> InboundMessage:
    """
    Parse one inbound message.

    Raises:
        InvalidMessageError: Not JSON, not an object, unknown type, or bad fields
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise InvalidMessageError(f"Message is not valid JSON: {e}", cause=e) from e
    if not isinstance(raw, dict):
        raise InvalidMessageError("Message must be a JSON object")

    message_type = raw.get("type")
    try:
        return _inbound_adapter.validate_python(raw)
    except ValidationError as e:
        raise InvalidMessageError(
            f"Invalid {message_type or 'untyped'} message: {e.errors()[0]['msg']}",
            message_type=message_type if isinstance(message_type, str) else None,
            cause=e,
        ) from e


# -----------------------------------------------------------------------------
# Outbound
# -----------------------------------------------------------------------------


class Log(PanelMessage):
    type: Literal["log"] = "log"
    text: str


class Status(PanelMessage):
    type: Literal["status"] = "status"
    files: list[str]


class PreviewResult(PanelMessage):
    type: Literal["preview"] = "preview"
    file: str
    text: str


class TokenSaved(PanelMessage):
    type: Literal["tokenSaved"] = "tokenSaved"


class TokenCleared(PanelMessage):
    type: Literal["tokenCleared"] = "tokenCleared"


class Error(PanelMessage):
    type: Literal["error"] = "error"
    text: str


class DeployResult(PanelMessage):
    type: Literal["deployResult"] = "deployResult"
    report: DeployReport
