import base64
from unittest.mock import MagicMock, patch

import pytest
import requests

from smart_recipes.errors import RecognitionError
from smart_recipes.vision.clarifai_client import detect_concepts
from smart_recipes.vision.config import VisionConfig

ENABLED_CONFIG = VisionConfig(api_key="test-key", timeout=5.0)
NO_KEY_CONFIG = VisionConfig(api_key="")


def _concepts_response(names: list[str]) -> MagicMock:
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {
        "outputs": [{
            "data": {
                "concepts": [
                    {"name": n, "value": round(0.99 - i * 0.05, 2)} for i, n in enumerate(names)
                ]
            }
        }]
    }
    return response


@patch("smart_recipes.vision.clarifai_client.requests.post")
def test_detect_concepts_returns_top_five_lowercased(mock_post):
    mock_post.return_value = _concepts_response(
        ["Tomato", "Vegetable", "Basil", "Food", "Mozzarella", "Plate", "Table"]
    )

    labels = detect_concepts(b"fake-image", config=ENABLED_CONFIG)

    assert labels == ["tomato", "vegetable", "basil", "food", "mozzarella"]


@patch("smart_recipes.vision.clarifai_client.requests.post")
def test_detect_concepts_sends_base64_payload(mock_post):
    mock_post.return_value = _concepts_response(["egg"])

    detect_concepts(b"\x89PNG", config=ENABLED_CONFIG)

    args, kwargs = mock_post.call_args
    assert args[0] == ENABLED_CONFIG.model_url
    assert kwargs["headers"]["Authorization"] == "Key test-key"
    assert kwargs["timeout"] == 5.0
    sent = kwargs["json"]["inputs"][0]["data"]["image"]["base64"]
    assert base64.b64decode(sent) == b"\x89PNG"


@patch("smart_recipes.vision.clarifai_client.requests.post")
def test_http_error_raises(mock_post):
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
    mock_post.return_value = response

    with pytest.raises(RecognitionError):
        detect_concepts(b"img", config=ENABLED_CONFIG)


@patch("smart_recipes.vision.clarifai_client.requests.post")
def test_timeout_raises(mock_post):
    mock_post.side_effect = requests.Timeout("timed out")

    with pytest.raises(RecognitionError):
        detect_concepts(b"img", config=ENABLED_CONFIG)


@patch("smart_recipes.vision.clarifai_client.requests.post")
def test_unexpected_shape_raises(mock_post):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"status": {"code": 10000}, "outputs": []}
    mock_post.return_value = response

    with pytest.raises(RecognitionError):
        detect_concepts(b"img", config=ENABLED_CONFIG)


@patch("smart_recipes.vision.clarifai_client.requests.post")
def test_missing_api_key_raises_without_calling(mock_post):
    with pytest.raises(RecognitionError):
        detect_concepts(b"img", config=NO_KEY_CONFIG)
    mock_post.assert_not_called()
