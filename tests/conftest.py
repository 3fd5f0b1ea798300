import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from vocabbox.config import Config, SettingsManager
from vocabbox.models import WordDraft
from vocabbox.services import (
    BaseImagePicker,
    LearningListStore,
    PermissionStatus,
    PickerAsset,
    PickerResult,
)
from vocabbox.ui.add_word_controller import AddWordController


@pytest.fixture(autouse=True)
def media_dir(tmp_path, monkeypatch):
    """Keep every test's media files inside tmp_path."""
    media = tmp_path / "media"
    monkeypatch.setattr(Config, "MEDIA_DIR", str(media))
    return media


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Fresh SettingsManager backed by a temp file, no env overrides."""
    for key in SettingsManager.DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    SettingsManager.reset_instance()
    manager = SettingsManager(str(tmp_path / "settings.json"))
    yield manager
    SettingsManager.reset_instance()


@pytest.fixture
def apple() -> WordDraft:
    return WordDraft(
        search_text="apple",
        word="apple",
        phonetics="/ˈæp.əl/",
        part_of_speech="noun",
        meaning="A common, round fruit produced by the tree Malus domestica.",
        audio="https://example.com/apple.mp3",
        image="https://example.com/apple.jpg",
    )


class FakeLookup:
    """Lookup double with per-text results and delays."""

    def __init__(self, results: Optional[Dict[str, WordDraft]] = None):
        self.results = results or {}
        self.delays: Dict[str, float] = {}
        self.calls: List[str] = []

    async def get_word_info(self, text: str) -> Optional[WordDraft]:
        self.calls.append(text)
        await asyncio.sleep(self.delays.get(text, 0))
        return self.results.get(text)


class FakePicker(BaseImagePicker):
    def __init__(self, status=PermissionStatus.GRANTED, uri: Optional[str] = "/photos/cat.jpg"):
        self.status = status
        self.uri = uri
        self.permission_requests = 0
        self.launches = 0

    async def request_permission(self) -> PermissionStatus:
        self.permission_requests += 1
        return self.status

    async def launch_image_library(self) -> PickerResult:
        self.launches += 1
        if self.uri is None:
            return PickerResult.cancelled()
        return PickerResult(canceled=False, assets=[PickerAsset(uri=self.uri)])


class FakeSound:
    def __init__(self):
        self.played: List[str] = []

    async def play(self, audio: Optional[str]) -> bool:
        if not audio:
            return False
        self.played.append(audio)
        return True


@pytest.fixture
def store(tmp_path) -> LearningListStore:
    store = LearningListStore(csv_path=str(tmp_path / "words.csv"))
    store.load()
    return store


@pytest.fixture
def fake_lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture
def fake_picker() -> FakePicker:
    return FakePicker()


@pytest.fixture
def fake_sound() -> FakeSound:
    return FakeSound()


@pytest.fixture
def navigation() -> List[str]:
    return []


@pytest.fixture
def alerts() -> List[Tuple[str, str]]:
    return []


@pytest.fixture
def controller(fake_lookup, store, fake_picker, fake_sound, navigation, alerts) -> AddWordController:
    return AddWordController(
        lookup=fake_lookup,
        store=store,
        picker=fake_picker,
        sound=fake_sound,
        navigate=navigation.append,
        alert=lambda title, message: alerts.append((title, message)),
        debounce_ms=50,
    )
