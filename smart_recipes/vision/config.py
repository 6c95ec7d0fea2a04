from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class VisionConfig:
    api_key: str = os.getenv("CLARIFAI_API_KEY", "")
    model_url: str = (
        "https://api.clarifai.com/v2/models/general-image-recognition/"
        "versions/aa7f35c01e0642fda5cf400f543e7c40/outputs"
    )
    timeout: float = 15.0
    top_n: int = 5


DEFAULT_VISION_CONFIG = VisionConfig()
