"""VocabBox - build your vocabulary one word at a time"""

__version__ = "1.0.0"

from .config import Config, SettingsManager
from .models import WordDraft
from .services import LearningListStore, WordLookupService

__all__ = [
    'Config',
    'SettingsManager',
    'WordDraft',
    'LearningListStore',
    'WordLookupService',
]
