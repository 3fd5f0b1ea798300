"""
VocabBox: Flet Application
--------------------------

App shell hosting the Add Word and All Words screens.
"""

import logging
from typing import Dict

import flet as ft

from vocabbox.config import Config, SettingsManager
from vocabbox.services import LearningListStore, SoundService, StorageBackend, WordLookupService
from vocabbox.ui.add_word import AddWordView
from vocabbox.ui.add_word_controller import ALL_WORDS_ROUTE, AddWordController
from vocabbox.ui.all_words import AllWordsView
from vocabbox.ui.flet_adapters import FletAudioPlayer, FletImagePicker, show_alert, show_snackbar
from vocabbox.ui.theme import get_palette
from vocabbox.utils import setup_logger

logger = logging.getLogger(__name__)

ADD_WORD_ROUTE = "AddWord"


class VocabBoxApp:
    """Main application controller."""

    def __init__(self, page: ft.Page) -> None:
        """
        Initialize the application.

        Args:
            page: Flet page instance
        """
        self.page = page
        self.settings = SettingsManager()
        self.colors = get_palette(self.settings.get("THEME_MODE", "light"))

        self._setup_page()
        self._init_services()

    async def start(self) -> None:
        """Load the learning list off the event loop, then show the All Words screen."""
        await self.store.load_async()
        self._init_views()
        self._build_ui()
        self.navigate(ALL_WORDS_ROUTE)

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = "VocabBox"
        self.page.theme_mode = (
            ft.ThemeMode.DARK if self.settings.get("THEME_MODE") == "dark" else ft.ThemeMode.LIGHT
        )
        self.page.theme = ft.Theme(color_scheme_seed=self.colors.primary900)
        self.page.bgcolor = self.colors.surface
        self.page.padding = 0
        self.page.window.width = 480
        self.page.window.height = 860
        self.page.on_disconnect = self._on_disconnect

    def _init_services(self) -> None:
        self.store = LearningListStore(
            csv_path=Config.WORDS_CSV_FILE,
            backend=StorageBackend.parse(self.settings.get("STORAGE_BACKEND", "csv")),
            db_path=Config.WORDS_DB_FILE,
            autosave=False,
        )
        self.store.on_change(self._schedule_save)

        self.lookup = WordLookupService(tts_fallback=self.settings.get("TTS_FALLBACK", False))
        self.sound = SoundService(player=FletAudioPlayer(self.page))

    def _init_views(self) -> None:
        """Initialize all view containers."""
        self.add_word_controller = AddWordController(
            lookup=self.lookup,
            store=self.store,
            picker=FletImagePicker(self.page, self.settings),
            sound=self.sound,
            navigate=self.navigate,
            alert=lambda title, message: show_alert(self.page, title, message),
            debounce_ms=self.settings.get("LOOKUP_DEBOUNCE_MS", Config.LOOKUP_DEBOUNCE_MS),
        )
        self.add_word = AddWordView(
            self.page,
            self.add_word_controller,
            self.colors,
            set_title=self._set_title,
        )
        self.all_words = AllWordsView(
            self.page,
            self.store,
            self.sound,
            self.colors,
            on_add_click=lambda: self.navigate(ADD_WORD_ROUTE),
        )

        self.views: Dict[str, ft.Container] = {
            ADD_WORD_ROUTE: self.add_word.container,
            ALL_WORDS_ROUTE: self.all_words.container,
        }
        self.current_route: str = ""

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        self.back_button = ft.IconButton(
            icon=ft.Icons.ARROW_BACK,
            on_click=lambda _: self.navigate(ALL_WORDS_ROUTE),
            visible=False,
        )
        self.app_bar = ft.AppBar(
            leading=self.back_button,
            title=ft.Text("All words"),
            bgcolor=self.colors.primary200,
        )
        self.page.appbar = self.app_bar

        self.content_area = ft.Container(expand=True)
        self.page.add(self.content_area)

    def _set_title(self, title: str) -> None:
        self.app_bar.title = ft.Text(title)

    def navigate(self, route: str) -> None:
        """
        Switch to a screen.

        Args:
            route: ADD_WORD_ROUTE or ALL_WORDS_ROUTE
        """
        if route not in self.views or route == self.current_route:
            return

        if route == ADD_WORD_ROUTE:
            self.add_word_controller.reset()
        else:
            self.add_word_controller.cancel_pending_lookup()
            self.all_words.refresh()
            self._set_title("All words")

        self.current_route = route
        self.back_button.visible = route == ADD_WORD_ROUTE
        self.content_area.content = self.views[route]
        self.page.update()

    def _schedule_save(self) -> None:
        self.page.run_task(self._save_store)

    async def _save_store(self) -> None:
        if not await self.store.save_async():
            show_snackbar(self.page, "Could not save the learning list", error=True)

    async def _on_disconnect(self, e) -> None:
        await self.lookup.close()
        await self.sound.close()


async def main(page: ft.Page) -> None:
    """
    Main entry point for Flet application.

    Args:
        page: Flet page instance
    """
    setup_logger()
    try:
        await VocabBoxApp(page).start()
    except Exception:
        logger.exception("UI failed to start")
        import traceback
        page.add(
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text("UI failed to start", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
                        ft.Text(traceback.format_exc(), size=11, selectable=True),
                    ],
                    spacing=10,
                ),
                padding=20,
            )
        )
        page.update()


if __name__ == "__main__":
    ft.run(main)
