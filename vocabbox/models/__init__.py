"""Data models."""

from .word import WordDraft

__all__ = ['WordDraft']
