# =============================================================================
# core/image_generation.py  —  The generate_image_with_gemini tool
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the capability listing and the Tool Invocation Handler.  The
#   handler takes one InvocationRequest and always produces exactly one
#   outcome:
#
#     Ok(ToolResult)          →  success, or any failure we can explain
#                                (bad input, n8n down, timeout, n8n error)
#     TransportFault(message) →  the requested tool does not exist
#
# HOW AN INVOCATION FLOWS (each step returns immediately on failure):
#   1. Name check       →  unknown name       →  TransportFault
#   2. Presence check   →  missing argument   →  error ToolResult, no HTTP
#   3. Format check     →  invalid base64     →  error ToolResult, no HTTP
#   4. Build payload    →  image, prompt, timestamp, source tag
#   5. POST to n8n      →  core/webhook.py
#   6. Translate reply  →  success / remote-reported failure
#   7. Translate errors →  connection / timeout / webhook status / other
# =============================================================================

import logging
from typing import Optional

import httpx

from core.config import ServerConfig
from core.models import (
    InvocationOutcome,
    InvocationRequest,
    Ok,
    OutboundPayload,
    ToolDescriptor,
    ToolResult,
    TransportFault,
    WebhookResult,
)
from core.validation import has_required_arguments, is_valid_base64
from core.webhook import WebhookClient, WebhookError


logger = logging.getLogger(__name__)


TOOL_NAME = "generate_image_with_gemini"

TOOL_DESCRIPTION = (
    "Generate or transform images using Google Imagen API through N8N workflow. "
    "Accepts a base64 encoded image and a text prompt to create modified versions."
)

IMAGE_BASE64_DESCRIPTION = (
    "Base64 encoded input image (JPEG, PNG, WebP supported). "
    "The image will be used as reference for generation."
)

PROMPT_DESCRIPTION = (
    "Descriptive text prompt for image generation. "
    "Be specific about desired style, colors, mood, or transformations."
)

GENERATE_IMAGE_TOOL = ToolDescriptor(
    name=TOOL_NAME,
    description=TOOL_DESCRIPTION,
    input_schema={
        "type": "object",
        "properties": {
            "image_base64": {"type": "string", "description": IMAGE_BASE64_DESCRIPTION},
            "prompt": {"type": "string", "description": PROMPT_DESCRIPTION},
        },
        "required": ["image_base64", "prompt"],
    },
)


# =============================================================================
# User-facing messages
# =============================================================================
MISSING_ARGUMENTS_MESSAGE = "Error: Both image_base64 and prompt are required parameters."
INVALID_BASE64_MESSAGE = (
    "Error: Invalid base64 image format. Please provide a valid base64 encoded image."
)
UNKNOWN_ERROR = "Unknown error occurred"
CONNECTION_REFUSED_HINT = (
    "Could not connect to N8N instance. "
    "Please check if N8N is running and the webhook URL is correct."
)
TIMEOUT_HINT = "Request timed out. The image generation process may take longer than expected."
TROUBLESHOOTING_CHECKLIST = (
    "Please check:\n"
    "- N8N instance is running\n"
    "- Webhook URL is correct\n"
    "- Google Cloud credentials are configured\n"
    "- Vertex AI API is enabled"
)
DEFAULT_MIME_TYPE = "image/png"


def list_tools() -> list[ToolDescriptor]:
    """Return every tool this server exposes (there is exactly one)."""
    return [GENERATE_IMAGE_TOOL]


def describe_failure(exc: Exception) -> str:
    """Pick the explanation for an exception raised while calling n8n."""
    if isinstance(exc, httpx.ConnectError):
        return CONNECTION_REFUSED_HINT
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return TIMEOUT_HINT
    if isinstance(exc, WebhookError):
        return str(exc)
    return str(exc) or UNKNOWN_ERROR


def render_webhook_result(result: WebhookResult) -> ToolResult:
    if not result.success:
        return ToolResult.error(f"❌ Image generation failed: {result.error or UNKNOWN_ERROR}")

    image_status = "Ready" if result.generated_image else "Not available"
    return ToolResult.text(
        "✅ Image generation completed successfully!\n\n"
        f"**Generated Image**: {image_status}\n"
        f"**Format**: {result.mime_type or DEFAULT_MIME_TYPE}\n"
        f"**Processed at**: {result.timestamp or 'unknown'}\n\n"
        "The generated image is available as base64 data."
    )


def render_failure(exc: Exception) -> ToolResult:
    return ToolResult.error(
        f"❌ Image generation failed: {describe_failure(exc)}\n\n{TROUBLESHOOTING_CHECKLIST}"
    )


class ImageGenerationHandler:
    """Validates a tools/call request, forwards it to n8n, and explains the outcome."""

    def __init__(self, config: ServerConfig, webhook: Optional[WebhookClient] = None) -> None:
        self.config = config
        self.webhook = webhook or WebhookClient.from_config(config)

    async def invoke(self, request: InvocationRequest) -> InvocationOutcome:
        if request.name != TOOL_NAME:
            return TransportFault(f"Unknown tool: {request.name}")

        args = request.arguments or {}
        image_base64 = args.get("image_base64")
        prompt = args.get("prompt")
        logger.debug(
            f"Tool called: {request.name} "
            f"(image_length={len(image_base64) if isinstance(image_base64, str) else 0}, "
            f"prompt={prompt!r})"
        )

        if not has_required_arguments(args):
            return Ok(ToolResult.error(MISSING_ARGUMENTS_MESSAGE))

        if not is_valid_base64(image_base64):
            return Ok(ToolResult.error(INVALID_BASE64_MESSAGE))

        try:
            logger.info("Sending request to N8N webhook...")
            payload = OutboundPayload.build(image_base64, prompt)
            result = await self.webhook.post(payload)
        except Exception as exc:
            logger.error(f"Request failed: {exc}")
            logger.debug("Full error", exc_info=exc)
            return Ok(render_failure(exc))

        return Ok(render_webhook_result(result))
