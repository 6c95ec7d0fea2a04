from __future__ import annotations

import base64
import logging
from typing import Any

import requests

from ..errors import RecognitionError
from .config import DEFAULT_VISION_CONFIG, VisionConfig

logger = logging.getLogger(__name__)


def _build_payload(image_bytes: bytes) -> dict[str, Any]:
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return {"inputs": [{"data": {"image": {"base64": encoded}}}]}


def _extract_labels(body: dict[str, Any], top_n: int) -> list[str]:
    """Concept names from the first output, in the order Clarifai ranked them."""
    try:
        concepts = body["outputs"][0]["data"]["concepts"]
        names = [str(c["name"]) for c in concepts]
    except (KeyError, IndexError, TypeError) as exc:
        raise RecognitionError(f"Unexpected recognition response shape: {exc!r}") from exc
    return [n.lower() for n in names[:top_n]]


def detect_concepts(
    image_bytes: bytes,
    config: VisionConfig = DEFAULT_VISION_CONFIG,
) -> list[str]:
    """
    Call Clarifai general image recognition and return the top labels.

    Confidence values are discarded. Any failure (missing key, HTTP error,
    timeout, bad JSON) raises :class:`RecognitionError`; there is no retry.
    """
    if not config.api_key:
        raise RecognitionError("CLARIFAI_API_KEY is not configured")

    try:
        response = requests.post(
            config.model_url,
            json=_build_payload(image_bytes),
            headers={
                "Authorization": f"Key {config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=config.timeout,
        )
        response.raise_for_status()
        body = response.json()
    except requests.RequestException as exc:
        raise RecognitionError(f"Recognition request failed: {exc}") from exc
    except ValueError as exc:
        raise RecognitionError(f"Recognition response is not JSON: {exc}") from exc

    labels = _extract_labels(body, config.top_n)
    logger.info("Recognised %d labels: %s", len(labels), ", ".join(labels))
    return labels
