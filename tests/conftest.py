"""
Pytest configuration and global fixtures.
"""
import re
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.exceptions import NotFoundError
from data.db_models import Base
from llm.llm_client_base import BaseLLMClient
from services.translation_service import Translator
from utils.image_utils import MediaImage


SAMPLE_OCR_RESPONSE = (
    '1: "Spirited Away" (from: {x:10, y:20}, to: {x:200, y:60})\n'
    '2: 2025 Festival (from: {x:15, y:80}, to: {x:180, y:110})\n'
    'Number of text blocks: 2'
)


class FakeLLMClient(BaseLLMClient):
    """Answers translation prompts with '[lang] text'; can fail per language."""

    PROMPT_RE = re.compile(r'Translate the following text to (\S+): (.*)\n', re.DOTALL)

    def __init__(self, failing_languages=(), empty_languages=()):
        super().__init__(model="fake")
        self.failing_languages = set(failing_languages)
        self.empty_languages = set(empty_languages)
        self.calls = []
        self.closed = False

    async def chat_completion(self, prompt, chat_history=None, **kwargs):
        match = self.PROMPT_RE.search(prompt)
        language, text = match.group(1), match.group(2)
        self.calls.append((language, text))
        if language in self.failing_languages:
            raise RuntimeError(f"{language} backend down")
        if language in self.empty_languages:
            return "   "
        return f"  [{language}] {text}  "

    async def close(self):
        self.closed = True


class FakeCompletions:
    """Stands in for ``AsyncOpenAI().chat.completions``."""

    def __init__(self, content=SAMPLE_OCR_RESPONSE, error=None):
        self.content = content
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason="stop")])


class FakeOCRClient:
    def __init__(self, content=SAMPLE_OCR_RESPONSE, error=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, error))
        self.closed = False

    @property
    def requests(self):
        return self.chat.completions.requests

    async def close(self):
        self.closed = True


class FakeMediaResolver:
    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height

    def resolve(self, image_id):
        if image_id.startswith("missing"):
            raise NotFoundError("Image", image_id)
        return MediaImage(
            image_id=image_id,
            data=b"\x89PNG fake",
            mime_type="image/png",
            width=self.width,
            height=self.height
        )


@pytest.fixture
def test_db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_engine(
        "sqlite://",
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    session.rollback()
    session.close()


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def translator(fake_llm):
    return Translator(fake_llm)


@pytest.fixture
def fake_ocr_client():
    return FakeOCRClient()


@pytest.fixture
def fake_media_resolver():
    return FakeMediaResolver()


@pytest.fixture
def sample_image_bytes():
    """Encoded 120x80 PNG."""
    from io import BytesIO
    from PIL import Image

    img = Image.new('RGB', (120, 80), color='white')
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def media_dir(tmp_path, sample_image_bytes):
    """Media root holding one image called 'poster.png'."""
    (tmp_path / "poster.png").write_bytes(sample_image_bytes)
    return tmp_path


@pytest.fixture
def make_llm():
    """Factory for FakeLLMClient with per-language failures."""
    return FakeLLMClient


@pytest.fixture
def make_ocr_client():
    """Factory for FakeOCRClient with custom content or error."""
    return FakeOCRClient
