"""Services layer for business logic separation."""

from .debounce import Debouncer
from .image_picker import BaseImagePicker, PermissionStatus, PickerAsset, PickerResult
from .learning_list import LearningListStore, StorageBackend
from .lookup_service import WordLookupService
from .repository import BaseRepository, CSVRepository, SQLiteRepository
from .sound_service import SoundService

__all__ = [
    "Debouncer",
    "BaseImagePicker",
    "PermissionStatus",
    "PickerAsset",
    "PickerResult",
    "LearningListStore",
    "StorageBackend",
    "WordLookupService",
    "BaseRepository",
    "CSVRepository",
    "SQLiteRepository",
    "SoundService",
]
