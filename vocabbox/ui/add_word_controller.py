"""
Add Word Controller - state and actions of the Add Word screen.

Kept free of Flet so the behaviour can be driven from tests; the view
subscribes with on_change() and re-renders from the public properties.
"""

import logging
from typing import Callable, List, Optional

from ..config import Config
from ..models import WordDraft
from ..services import (
    BaseImagePicker,
    Debouncer,
    LearningListStore,
    PermissionStatus,
    SoundService,
    WordLookupService,
)

logger = logging.getLogger(__name__)

ALL_WORDS_ROUTE = "AllWords"
PERMISSION_ALERT_TITLE = "Permission required"
PERMISSION_ALERT_MESSAGE = "Media library permissions rejected"


class AddWordController:
    """
    Holds the search text, the current draft and the preview image.

    Args:
        lookup: Service resolving text to a draft
        store: Learning list receiving added words
        picker: Photo library access
        sound: Pronunciation player
        navigate: Called with a route name to leave the screen
        alert: Called with (title, message) to show a blocking alert
        debounce_ms: Quiet period before a lookup is issued
    """

    def __init__(
        self,
        lookup: WordLookupService,
        store: LearningListStore,
        picker: BaseImagePicker,
        sound: SoundService,
        navigate: Callable[[str], None],
        alert: Callable[[str, str], None],
        debounce_ms: Optional[int] = None,
    ) -> None:
        self._lookup = lookup
        self._store = store
        self._picker = picker
        self._sound = sound
        self._navigate = navigate
        self._alert = alert
        self._debouncer = Debouncer(
            Config.LOOKUP_DEBOUNCE_MS if debounce_ms is None else debounce_ms
        )

        self.text: str = ""
        self.draft: Optional[WordDraft] = None
        self.image: Optional[str] = None
        self.is_looking_up: bool = False

        self._listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def on_change(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("Add Word listener failed")

    @property
    def title(self) -> str:
        if self.draft is not None and self.draft.word:
            return f'Adding word "{self.draft.word}"'
        return "Adding word"

    @property
    def can_add(self) -> bool:
        return self.draft is not None and self.draft.is_submittable

    @property
    def already_in_list(self) -> bool:
        return self.draft is not None and self._store.contains_word(self.draft.word)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def on_change_text(self, text: Optional[str]) -> None:
        """
        Handle a keystroke in the search field.

        The previous result disappears immediately; a lookup for the new
        text is issued once the text has been stable for the debounce delay.
        Must be called from the running event loop.
        """
        self.draft = None
        self.text = text or ""

        if self.text.strip():
            self.is_looking_up = True
            self._debouncer.schedule(self._run_lookup, self.text)
        else:
            self.is_looking_up = False
            self._debouncer.cancel()

        self._notify()

    async def _run_lookup(self, token: int, text: str) -> None:
        try:
            draft = await self._lookup.get_word_info(text)
        except Exception:
            logger.exception("Lookup for %r failed", text)
            draft = None

        if not self._debouncer.is_current(token):
            logger.debug("Dropping stale lookup result for %r", text)
            return

        self.draft = draft
        self.image = draft.image if draft is not None else None
        self.is_looking_up = False
        self._notify()

    def cancel_pending_lookup(self) -> None:
        """Drop any scheduled or in-flight lookup (e.g. when leaving the screen)."""
        self._debouncer.cancel()
        self.is_looking_up = False

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    async def pick_image(self) -> bool:
        """
        Let the user attach an image from the photo library.

        Returns:
            True if an image was picked
        """
        status = await self._picker.request_permission()
        if status != PermissionStatus.GRANTED:
            self._alert(PERMISSION_ALERT_TITLE, PERMISSION_ALERT_MESSAGE)
            return False

        result = await self._picker.launch_image_library()
        uri = result.first_uri
        if uri is None:
            return False

        self.image = uri
        if self.draft is not None:
            self.draft = self.draft.with_image(uri)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Audio / submit
    # ------------------------------------------------------------------

    async def play_audio(self) -> bool:
        if self.draft is None or not self.draft.audio:
            return False
        return await self._sound.play(self.draft.audio)

    def add(self) -> bool:
        """
        Append the current draft to the learning list and leave the screen.

        Returns:
            True if the word was added
        """
        if not self.can_add:
            return False

        if self._store.add_word(self.draft) is None:
            return False

        self.cancel_pending_lookup()
        self._navigate(ALL_WORDS_ROUTE)
        return True

    def reset(self) -> None:
        """Clear the screen for the next word."""
        self.cancel_pending_lookup()
        self.text = ""
        self.draft = None
        self.image = None
        self._notify()
