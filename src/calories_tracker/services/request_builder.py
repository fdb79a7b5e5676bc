"""Build chat-completion requests for food image analysis."""

import base64

from calories_tracker.domain.provider import ChatMessage, ProviderRequest

DATA_URL_MARKER = "data:image"
JPEG_DATA_URL_PREFIX = "data:image/jpeg;base64,"

SYSTEM_PROMPT = (
    "You are a nutrition expert that analyzes food images. "
    "Identify all food items in the image, estimate their calories, "
    "and provide a total calorie count. Return the response in a structured "
    "format with food items, individual calories, and total calories. "
    "Be as accurate as possible."
)

USER_PROMPT = (
    "Analyze this food image. Identify all food items, estimate calories for "
    "each item, and provide a total calorie count. Format your response as a "
    "JSON object with the following structure: "
    "{ foodItems: [{ name: string, calories: number, quantity?: string, "
    "unit?: string }], totalCalories: number, nutritionalSummary: string }"
)


def build_request(image_data: str, model: str) -> ProviderRequest:
    """Return the provider request for a base64 image or image data URL."""
    return ProviderRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(
                role="user",
                content=[
                    {"type": "text", "text": USER_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": normalize_image_data_url(image_data)},
                    },
                ],
            ),
        ],
    )


def normalize_image_data_url(image_data: str) -> str:
    """Prefix bare base64 with the JPEG data URL header; keep data URLs as-is."""
    if image_data.startswith(DATA_URL_MARKER):
        return image_data
    return f"{JPEG_DATA_URL_PREFIX}{image_data}"


def image_bytes_to_data_url(image_bytes: bytes) -> str:
    """Convert raw image bytes to a base64 data URL."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
