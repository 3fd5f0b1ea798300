"""
All Words View
--------------

Lists the learning list with a filter, pronunciation playback and delete.
"""

import os
from typing import Any, Callable, Dict, Optional

import flet as ft

from ..services import LearningListStore, SoundService
from ..utils.paths import MediaPathGenerator
from .flet_adapters import show_snackbar
from .theme import DesignTokens, Palette


class AllWordsView:
    """List of words the user is learning."""

    THUMBNAIL_SIZE = 56

    def __init__(
        self,
        page: ft.Page,
        store: LearningListStore,
        sound: SoundService,
        colors: Palette,
        on_add_click: Callable[[], None],
    ) -> None:
        self.page = page
        self.store = store
        self.sound = sound
        self.colors = colors
        self._on_add_click = on_add_click

        self._query: str = ""
        self._list: Optional[ft.ListView] = None
        self._count_text: Optional[ft.Text] = None

        self._container = self._build_view()
        store.on_change(self.refresh)

    @property
    def container(self) -> ft.Container:
        return self._container

    def _build_view(self) -> ft.Container:
        self._count_text = ft.Text("", size=DesignTokens.FONT_LABEL, color=self.colors.grey600)
        self._list = ft.ListView(spacing=DesignTokens.SPACING_SM, expand=True)

        header = ft.Row(
            controls=[
                ft.TextField(
                    hint_text="Filter words..",
                    prefix_icon=ft.Icons.SEARCH,
                    on_change=self._on_filter_change,
                    border_color=self.colors.primary200,
                    expand=True,
                ),
                ft.IconButton(
                    icon=ft.Icons.ADD,
                    icon_color=self.colors.primary900,
                    tooltip="Add word",
                    on_click=lambda _: self._on_add_click(),
                ),
            ],
        )

        self._populate()
        return ft.Container(
            content=ft.Column(
                controls=[header, self._count_text, self._list],
                expand=True,
            ),
            padding=DesignTokens.SPACING_MD,
            expand=True,
        )

    def _thumbnail(self, image: str) -> ft.Control:
        if not image:
            return ft.Container(
                content=ft.Icon(ft.Icons.IMAGE_OUTLINED, color=self.colors.grey600),
                width=self.THUMBNAIL_SIZE,
                height=self.THUMBNAIL_SIZE,
                alignment=ft.Alignment(0, 0),
            )
        src = image if MediaPathGenerator.is_remote(image) else os.path.abspath(image)
        return ft.Image(
            src=src,
            width=self.THUMBNAIL_SIZE,
            height=self.THUMBNAIL_SIZE,
            fit=ft.BoxFit.COVER,
            border_radius=DesignTokens.RADIUS_MD,
        )

    def _build_row(self, entry: Dict[str, Any]) -> ft.Control:
        draft = LearningListStore.to_draft(entry)
        uuid = entry["UUID"]

        subtitle = " · ".join(p for p in (draft.phonetics, draft.part_of_speech) if p)
        trailing = []
        if draft.audio:
            trailing.append(
                ft.IconButton(
                    icon=ft.Icons.VOLUME_UP_OUTLINED,
                    icon_color=self.colors.primary900,
                    on_click=lambda _, a=draft.audio: self.page.run_task(self._play, a),
                )
            )
        trailing.append(
            ft.IconButton(
                icon=ft.Icons.DELETE_OUTLINE,
                icon_color=self.colors.danger,
                tooltip="Remove",
                on_click=lambda _, u=uuid: self._remove(u),
            )
        )

        return ft.Container(
            content=ft.Row(
                controls=[
                    self._thumbnail(draft.image or ""),
                    ft.Column(
                        controls=[
                            ft.Text(draft.word, size=DesignTokens.FONT_PHONETICS, weight=ft.FontWeight.BOLD,
                                    color=self.colors.font_main),
                            ft.Text(subtitle, size=DesignTokens.FONT_LABEL, color=self.colors.grey600),
                            ft.Text(draft.meaning, size=DesignTokens.FONT_LABEL + 2, color=self.colors.font_main,
                                    max_lines=2, overflow=ft.TextOverflow.ELLIPSIS),
                        ],
                        spacing=2,
                        expand=True,
                    ),
                    ft.Row(controls=trailing, spacing=0),
                ],
                spacing=DesignTokens.SPACING_MD,
            ),
            padding=DesignTokens.SPACING_SM,
            border=ft.Border.all(1, self.colors.primary200),
            border_radius=DesignTokens.RADIUS_MD,
        )

    def _populate(self) -> None:
        entries = self.store.entries(self._query)
        self._list.controls = [self._build_row(entry) for entry in entries]
        if not entries:
            message = "No matching words." if self._query else "Your learning list is empty."
            self._list.controls = [ft.Text(message, color=self.colors.grey600)]
        self._count_text.value = f"{self.store.count} words"

    def refresh(self) -> None:
        self._populate()
        self.page.update()

    def _on_filter_change(self, e: ft.ControlEvent) -> None:
        self._query = e.control.value or ""
        self.refresh()

    async def _play(self, audio: str) -> None:
        if not await self.sound.play(audio):
            show_snackbar(self.page, "Pronunciation unavailable", error=True)

    def _remove(self, uuid: str) -> None:
        if self.store.remove_word(uuid):
            show_snackbar(self.page, "Word removed")
        else:
            show_snackbar(self.page, "Could not remove the word", error=True)
