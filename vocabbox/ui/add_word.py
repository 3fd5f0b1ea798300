"""
Add Word View
-------------

Search field with debounced dictionary lookup, an image preview that opens
the photo library, pronunciation playback and the Add button.
"""

import os
from typing import Callable, Optional

import flet as ft

from ..utils.paths import MediaPathGenerator
from .add_word_controller import AddWordController
from .flet_adapters import show_snackbar
from .theme import DesignTokens, Palette


def _image_src(reference: str) -> str:
    if MediaPathGenerator.is_remote(reference):
        return reference
    return os.path.abspath(reference)


class AddWordView:
    """Flet rendering of an AddWordController."""

    def __init__(
        self,
        page: ft.Page,
        controller: AddWordController,
        colors: Palette,
        set_title: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialize the Add Word view.

        Args:
            page: Flet page instance for updates
            controller: Screen state and actions
            colors: Active palette
            set_title: Callback updating the app bar title
        """
        self.page = page
        self.controller = controller
        self.colors = colors
        self._set_title = set_title

        # UI References
        self._preview: Optional[ft.Container] = None
        self._search_field: Optional[ft.TextField] = None
        self._result_column: Optional[ft.Column] = None
        self._progress: Optional[ft.ProgressBar] = None

        self._container = self._build_view()
        controller.on_change(self._render)

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_placeholder(self) -> ft.Container:
        return ft.Container(
            content=ft.Text("No image taken yet.", color=self.colors.grey600),
            width=DesignTokens.PREVIEW_SIZE,
            height=DesignTokens.PREVIEW_SIZE,
            border_radius=DesignTokens.RADIUS_MD,
            border=ft.Border.all(1, self.colors.primary200),
            bgcolor=self.colors.font_inverse,
            alignment=ft.Alignment(0, 0),
        )

    def _build_preview_content(self) -> ft.Control:
        if not self.controller.image:
            return self._build_placeholder()
        return ft.Image(
            src=_image_src(self.controller.image),
            width=DesignTokens.PREVIEW_SIZE,
            height=DesignTokens.PREVIEW_SIZE,
            fit=ft.BoxFit.COVER,
            border_radius=DesignTokens.RADIUS_MD,
        )

    def _build_view(self) -> ft.Container:
        self._preview = ft.Container(
            content=self._build_preview_content(),
            on_click=self._on_preview_click,
            alignment=ft.Alignment(0, 0),
            margin=ft.Margin.only(bottom=DesignTokens.SPACING_MD),
            tooltip="Choose an image",
        )

        self._search_field = ft.TextField(
            value=self.controller.text,
            hint_text="type here..",
            hint_style=ft.TextStyle(color=self.colors.grey600),
            text_size=DesignTokens.FONT_INPUT,
            color=self.colors.font_main,
            height=DesignTokens.INPUT_HEIGHT + 12,
            border_color=self.colors.primary200,
            border_radius=5,
            content_padding=10,
            on_change=self._on_text_change,
            autofocus=True,
        )

        self._progress = ft.ProgressBar(visible=False, color=self.colors.primary900)

        input_section = ft.Container(
            content=ft.Column(
                controls=[
                    self._preview,
                    ft.Text(
                        "Your word to search:",
                        size=DesignTokens.FONT_LABEL,
                        color=self.colors.grey600,
                    ),
                    self._search_field,
                    self._progress,
                ],
                spacing=DesignTokens.SPACING_XS,
                horizontal_alignment=ft.CrossAxisAlignment.STRETCH,
            ),
            margin=ft.Margin.symmetric(horizontal=DesignTokens.SPACING_MD),
        )

        self._result_column = ft.Column(controls=[], spacing=DesignTokens.SPACING_SM)

        return ft.Container(
            content=ft.Column(
                controls=[
                    input_section,
                    ft.Container(
                        content=self._result_column,
                        padding=ft.Padding.symmetric(vertical=8, horizontal=10),
                        expand=True,
                    ),
                ],
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
            expand=True,
        )

    def _build_result(self) -> list:
        draft = self.controller.draft
        if draft is None:
            return []

        header = [
            ft.Text(
                draft.word,
                size=DesignTokens.FONT_WORD,
                color=self.colors.font_main,
            ),
        ]
        if draft.audio:
            header.append(
                ft.IconButton(
                    icon=ft.Icons.VOLUME_UP_OUTLINED,
                    icon_size=28,
                    icon_color=self.colors.primary900,
                    tooltip="Play pronunciation",
                    on_click=self._on_play_click,
                )
            )
        header.append(
            ft.Text(
                draft.phonetics,
                size=DesignTokens.FONT_PHONETICS,
                color=self.colors.font_main,
            )
        )

        controls = [
            ft.Row(
                controls=header,
                vertical_alignment=ft.CrossAxisAlignment.END,
                spacing=DesignTokens.SPACING_LG,
            ),
            ft.Text(draft.part_of_speech, size=DesignTokens.FONT_PHONETICS, color=self.colors.font_main),
            ft.Container(
                content=ft.Text(draft.meaning, size=DesignTokens.FONT_MEANING, color=self.colors.font_main),
                padding=13,
            ),
        ]

        if self.controller.already_in_list:
            controls.append(
                ft.Text(
                    "This word is already in your list.",
                    size=DesignTokens.FONT_LABEL,
                    color=self.colors.grey600,
                    italic=True,
                )
            )

        if self.controller.can_add:
            controls.append(
                ft.Container(
                    content=ft.Text("Add", size=DesignTokens.FONT_BUTTON, color=self.colors.font_inverse),
                    bgcolor=self.colors.primary900,
                    border_radius=DesignTokens.RADIUS_SM,
                    height=DesignTokens.BUTTON_HEIGHT,
                    alignment=ft.Alignment(0, 0),
                    on_click=self._on_add_click,
                )
            )
        return controls

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self) -> None:
        """Re-render from controller state."""
        self._preview.content = self._build_preview_content()
        self._result_column.controls = self._build_result()
        self._progress.visible = self.controller.is_looking_up
        if self._search_field.value != self.controller.text:
            self._search_field.value = self.controller.text
        if self._set_title:
            self._set_title(self.controller.title)
        self.page.update()

    def refresh(self) -> None:
        self._render()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def _on_text_change(self, e: ft.ControlEvent) -> None:
        # Async handler: runs on the event loop the debouncer schedules on
        self.controller.on_change_text(e.control.value)

    async def _on_preview_click(self, e: ft.ControlEvent) -> None:
        try:
            await self.controller.pick_image()
        except Exception as ex:
            show_snackbar(self.page, f"Could not open photo library: {ex}", error=True)

    async def _on_play_click(self, e: ft.ControlEvent) -> None:
        if not await self.controller.play_audio():
            show_snackbar(self.page, "Pronunciation unavailable", error=True)

    def _on_add_click(self, e: ft.ControlEvent) -> None:
        if not self.controller.add():
            show_snackbar(self.page, "Could not add the word", error=True)
