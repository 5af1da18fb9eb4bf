"""
Shared pytest fixtures for itinerary map tests.
"""

import os
from io import BytesIO
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from PIL import Image

DEFAULT_MARKEXPR = "smoke or (not integration and not slow)"


def pytest_addoption(parser):
    """Add --full flag to run entire test suite"""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite (including integration and real API tests)"
    )


def pytest_configure(config):
    """Configure test run based on flags"""
    if config.getoption("--full"):
        # Only clear default marker if no explicit -m flag was provided
        if config.option.markexpr == DEFAULT_MARKEXPR:
            config.option.markexpr = ""


# Project root
PROJECT_ROOT = Path(__file__).parent.parent


def _make_png(width: int = 4, height: int = 3) -> bytes:
    """Create a small valid PNG."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), (255, 250, 240)).save(buffer, format="PNG")
    return buffer.getvalue()


TINY_PNG = _make_png()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def check_api_key():
    """Check if Gemini API key is available."""
    from dotenv import load_dotenv
    load_dotenv(PROJECT_ROOT / ".env")
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        pytest.skip("Gemini API key not found. Set GEMINI_API_KEY in .env file.")
    return api_key


@pytest.fixture
def tiny_png():
    """Bytes of a small valid PNG."""
    return TINY_PNG


@pytest.fixture
def text_response():
    """Factory for a generate_content response carrying text."""
    def _make(text):
        return SimpleNamespace(text=text, candidates=[])
    return _make


@pytest.fixture
def image_response():
    """Factory for a generate_content response carrying one inline image."""
    def _make(data=TINY_PNG, mime_type="image/png"):
        part = SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))
        content = SimpleNamespace(parts=[part])
        return SimpleNamespace(text=None, candidates=[SimpleNamespace(content=content)])
    return _make


@pytest.fixture
def empty_image_response():
    """A response with a text part but no image."""
    part = SimpleNamespace(text="I cannot draw that.", inline_data=None)
    content = SimpleNamespace(parts=[part])
    return SimpleNamespace(text="I cannot draw that.", candidates=[SimpleNamespace(content=content)])


@pytest.fixture
def mock_client():
    """genai.Client double; set client.models.generate_content per test."""
    client = MagicMock()
    client.models.generate_content = MagicMock()
    return client


@pytest.fixture
def sample_locations_payload():
    """Thirteen extracted locations, as the text model returns them (no ids)."""
    return [
        {"name": "法蘭克福", "description": "哇！大城市！", "emoji": "✈️", "x": 45, "y": 12, "tags": ["起點", "機場"]},
        {"name": "Roth", "description": "比賽日好期待！", "emoji": "🏊", "x": 82, "y": 18, "tags": ["鐵人", "比賽"]},
        {"name": "Kirchzarten", "description": "營地好舒服～", "emoji": "⛺", "x": 62, "y": 62, "tags": ["露營", "泳池"]},
        {"name": "Badeparadies Schwarzwald", "description": "水上樂園！哇！", "emoji": "🌊", "x": 78, "y": 72, "tags": ["水上樂園", "玩水"]},
        {"name": "Titisee", "description": "湖邊小鎮好漂亮", "emoji": "🏞️", "x": 80, "y": 74, "tags": ["湖", "小鎮"]},
        {"name": "Feldberg", "description": "纜車好高哭哭", "emoji": "🚠", "x": 70, "y": 86, "tags": ["山", "纜車"]},
        {"name": "Schluchsee", "description": "湖畔散步～", "emoji": "🛶", "x": 88, "y": 88, "tags": ["湖", "划船"]},
        {"name": "上科尼斯堡城堡", "description": "城堡好厲害！", "emoji": "🏰", "x": 22, "y": 48, "tags": ["城堡", "歷史"]},
        {"name": "猴山", "description": "猴子吃爆米花！", "emoji": "🐒", "x": 28, "y": 40, "tags": ["動物", "猴子"]},
        {"name": "科爾馬", "description": "小威尼斯好可愛", "emoji": "🏘️", "x": 18, "y": 62, "tags": ["小鎮", "運河"]},
        {"name": "里博維萊", "description": "童話小鎮哇！", "emoji": "🍷", "x": 12, "y": 54, "tags": ["葡萄酒", "小鎮"]},
        {"name": "Europa-Park", "description": "雲霄飛車！好期待！", "emoji": "🎢", "x": 40, "y": 60, "tags": ["樂園", "雲霄飛車"]},
        {"name": "埃居山", "description": "圓圓的小鎮～", "emoji": "🌸", "x": 20, "y": 76, "tags": ["小鎮", "花"]},
    ]
