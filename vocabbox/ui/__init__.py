"""UI components for VocabBox."""

from .add_word_controller import AddWordController

__all__ = [
    'AddWordController',
]
