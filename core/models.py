# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that
# flows through one tool invocation:
#
#   InvocationRequest  →  (validate)  →  OutboundPayload  →  n8n webhook
#                                                               │
#   Ok(ToolResult) / TransportFault  ←  (translate)  ←  WebhookResult
#
# Nothing here is retained between invocations.  Each model is built for a
# single call and dropped once the result is returned.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union


SOURCE_TAG = "claude-desktop-mcp"


# -----------------------------------------------------------------------------
# ToolDescriptor — static metadata for the one exposed capability
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and JSON input schema of an MCP tool."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# InvocationRequest — what the transport hands us for one tools/call
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class InvocationRequest:
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# OutboundPayload — the JSON body POSTed to the webhook
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class OutboundPayload:
    image_base64: str
    prompt: str
    timestamp: str
    source: str = SOURCE_TAG

    @classmethod
    def build(cls, image_base64: str, prompt: str) -> "OutboundPayload":
        """Stamp the request with the current UTC time, e.g. 2024-01-01T00:00:00.000Z."""
        now = datetime.now(timezone.utc)
        timestamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(image_base64=image_base64, prompt=prompt, timestamp=timestamp)

    def to_dict(self) -> dict:
        return {
            "image_base64": self.image_base64,
            "prompt": self.prompt,
            "timestamp": self.timestamp,
            "source": self.source,
        }


# -----------------------------------------------------------------------------
# WebhookResult — the n8n workflow's JSON reply
# -----------------------------------------------------------------------------
# The contract is owned by the workflow, so every field except `success` is
# optional.  A reply that is not a JSON object at all reads as "no success".
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class WebhookResult:
    success: bool = False
    generated_image: Optional[str] = None
    mime_type: Optional[str] = None
    timestamp: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "WebhookResult":
        if not isinstance(data, dict):
            return cls()
        return cls(
            success=bool(data.get("success")),
            generated_image=data.get("generated_image"),
            mime_type=data.get("mime_type"),
            timestamp=data.get("timestamp"),
            error=data.get("error"),
        )


# -----------------------------------------------------------------------------
# ToolResult — the only value returned to the MCP caller
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolResult:
    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def text(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(message)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(message)], is_error=True)

    @property
    def joined_text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        return {
            "content": [block.to_dict() for block in self.content],
            "isError": self.is_error,
        }


# -----------------------------------------------------------------------------
# Invocation outcome — Ok(ToolResult) | TransportFault(message)
# -----------------------------------------------------------------------------
# Every failure the handler knows how to explain ends up inside an Ok as an
# error ToolResult.  TransportFault is reserved for "no such tool", which the
# MCP layer reports through its own capability-not-found path.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Ok:
    result: ToolResult


@dataclass(frozen=True)
class TransportFault:
    message: str


InvocationOutcome = Union[Ok, TransportFault]
