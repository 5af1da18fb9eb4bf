"""
Tests for src/util/gemini.py

Basic tests for Gemini API wrapper functionality.
"""

import base64
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from config import get_text_model
from exceptions import ConfigurationError
from util.gemini import GeminiAPI, GeneratedImage, extract_inline_image, generate_content_async


class TestGeminiAPIBasics:
    """Test basic Gemini API functionality."""

    def test_configure_with_key(self):
        """Explicit key creates a client without touching the environment."""
        with patch("util.gemini.genai.Client") as mock_client_class:
            api = GeminiAPI(api_key="abc")

        mock_client_class.assert_called_once_with(api_key="abc")
        assert api._configured is True
        assert api.get_client() is mock_client_class.return_value

    def test_configure_from_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        with patch("util.gemini.genai.Client") as mock_client_class:
            api = GeminiAPI()

        mock_client_class.assert_called_once_with(api_key="from-env")
        assert api.get_client() is mock_client_class.return_value

    def test_configure_without_api_key_raises_error(self, monkeypatch):
        """Test that missing API key raises ConfigurationError."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="Gemini API key not found"):
            GeminiAPI()

    def test_get_client_without_configuration(self):
        """Test that using the wrapper without configuration raises error."""
        api = GeminiAPI.__new__(GeminiAPI)
        api._configured = False
        with pytest.raises(RuntimeError, match="Gemini API not configured"):
            api.get_client()


class TestGenerateContentAsync:

    @pytest.mark.asyncio
    async def test_forwards_arguments(self, mock_client, text_response):
        mock_client.models.generate_content.return_value = text_response("ok")

        response = await generate_content_async(mock_client, model="m", contents="c", config={"temperature": 0.1})

        assert response.text == "ok"
        mock_client.models.generate_content.assert_called_once_with(
            model="m", contents="c", config={"temperature": 0.1}
        )

    @pytest.mark.asyncio
    async def test_propagates_errors(self, mock_client):
        mock_client.models.generate_content.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(RuntimeError, match="quota exceeded"):
            await generate_content_async(mock_client, model="m", contents="c")


class TestExtractInlineImage:

    def test_returns_first_image(self, image_response, tiny_png):
        image = extract_inline_image(image_response(tiny_png, "image/jpeg"))

        assert isinstance(image, GeneratedImage)
        assert image.data == tiny_png
        assert image.mime_type == "image/jpeg"

    def test_skips_text_parts(self, tiny_png):
        text_part = SimpleNamespace(text="here you go", inline_data=None)
        image_part = SimpleNamespace(text=None, inline_data=SimpleNamespace(data=tiny_png, mime_type="image/png"))
        response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[text_part, image_part]))])

        assert extract_inline_image(response).data == tiny_png

    def test_returns_none_without_image(self, empty_image_response):
        assert extract_inline_image(empty_image_response) is None

    def test_returns_none_without_candidates(self):
        assert extract_inline_image(SimpleNamespace(candidates=None)) is None
        assert extract_inline_image(SimpleNamespace(candidates=[])) is None

    def test_missing_mime_type_defaults_to_png(self, tiny_png):
        part = SimpleNamespace(inline_data=SimpleNamespace(data=tiny_png, mime_type=None))
        response = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])

        assert extract_inline_image(response).mime_type == "image/png"


class TestGeneratedImage:

    def test_to_data_url(self):
        image = GeneratedImage(data=b"\x89PNG", mime_type="image/png")

        assert image.to_data_url() == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode()


class TestGeminiAPIIntegration:
    """Integration tests that make real API calls."""

    @pytest.mark.integration
    @pytest.mark.slow
    @pytest.mark.requires_api
    @pytest.mark.asyncio
    async def test_generate_text_content(self, check_api_key):
        """Test basic text generation."""
        api = GeminiAPI()
        response = await generate_content_async(
            api.get_client(),
            model=get_text_model(),
            contents="Say 'Hello World' and nothing else."
        )
        assert response is not None
        assert "hello" in response.text.lower()
