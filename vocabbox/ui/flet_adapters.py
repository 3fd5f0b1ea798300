"""
Flet adapters for the platform services the screens depend on:
photo library access, audio playback, alerts and snackbars.
"""

import asyncio
import logging
import os
import platform
import subprocess
import uuid
from typing import Optional

import aiofiles
import flet as ft

from ..config import SettingsManager
from ..services import BaseImagePicker, PermissionStatus, PickerAsset, PickerResult
from ..utils.paths import MediaPathGenerator

logger = logging.getLogger(__name__)

PERMISSION_SETTING = "MEDIA_LIBRARY_PERMISSION"


async def copy_into_media(source_path: str) -> Optional[str]:
    """
    Copy a picked file into the media directory.

    Uses atomic write pattern: write to temp file, then rename.

    Returns:
        Absolute path of the copy, or None on failure
    """
    output_path = os.path.abspath(MediaPathGenerator.picked_image_path(source_path))
    temp_path = f"{output_path}.{uuid.uuid4().hex[:8]}.tmp"
    try:
        os.makedirs(os.path.dirname(output_path), exist_ok=True)
        async with aiofiles.open(source_path, "rb") as src:
            content = await src.read()
        async with aiofiles.open(temp_path, "wb") as dst:
            await dst.write(content)
        os.replace(temp_path, output_path)
        return output_path
    except OSError as e:
        logger.error("Could not copy %s into media: %s", source_path, e)
        return None
    finally:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError as e:
                logger.debug("Could not remove temp file %s: %s", temp_path, e)


class FletImagePicker(BaseImagePicker):
    """
    Photo library access for Flet.

    Desktop platforms have no OS-level photo permission, so access is an
    in-app consent whose answer is remembered in settings.
    """

    def __init__(self, page: ft.Page, settings: Optional[SettingsManager] = None) -> None:
        self.page = page
        self._settings = settings or SettingsManager()
        self._file_picker: Optional[ft.FilePicker] = None

    def _get_file_picker(self) -> ft.FilePicker:
        if self._file_picker is None:
            self._file_picker = ft.FilePicker()
            self.page.services.append(self._file_picker)
        return self._file_picker

    async def _ask_consent(self) -> bool:
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def answer(granted: bool) -> None:
            dialog.open = False
            if dialog in self.page.overlay:
                self.page.overlay.remove(dialog)
            self.page.update()
            if not future.done():
                future.set_result(granted)

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Allow photo access?"),
            content=ft.Text("VocabBox would like to access your photo library to attach images to words."),
            actions=[
                ft.TextButton("Don't allow", on_click=lambda _: answer(False)),
                ft.TextButton("Allow", on_click=lambda _: answer(True)),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self.page.overlay.append(dialog)
        dialog.open = True
        self.page.update()
        return await future

    async def request_permission(self) -> PermissionStatus:
        status = PermissionStatus.parse(self._settings.get(PERMISSION_SETTING))
        if status != PermissionStatus.UNDETERMINED:
            return status

        granted = await self._ask_consent()
        status = PermissionStatus.GRANTED if granted else PermissionStatus.DENIED
        self._settings.set(PERMISSION_SETTING, status.value)
        logger.info("Media library permission %s", status.value)
        return status

    async def launch_image_library(self) -> PickerResult:
        files = await self._get_file_picker().pick_files(
            dialog_title="Choose an image",
            file_type=ft.FilePickerFileType.IMAGE,
            allow_multiple=False,
        )
        if not files or not files[0].path:
            return PickerResult.cancelled()

        picked = files[0]
        local_copy = await copy_into_media(picked.path)
        if local_copy is None:
            return PickerResult.cancelled()
        return PickerResult(canceled=False, assets=[PickerAsset(uri=local_copy, name=picked.name)])


class FletAudioPlayer:
    """Play local audio files through Flet's Audio control."""

    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self._audio_player = None

    def _play_with_system_player(self, abs_path: str) -> None:
        system = platform.system()
        try:
            if system == "Windows":
                os.startfile(abs_path)
            elif system == "Darwin":
                subprocess.Popen(["afplay", abs_path])
            else:
                subprocess.Popen(["xdg-open", abs_path])
        except OSError as e:
            logger.error("System audio player failed for %s: %s", abs_path, e)

    def __call__(self, file_path: str) -> None:
        abs_path = os.path.abspath(file_path)
        try:
            if self._audio_player is not None and self._audio_player in self.page.overlay:
                self.page.overlay.remove(self._audio_player)

            self._audio_player = ft.Audio(src=abs_path, autoplay=True, volume=1.0)
            self.page.overlay.append(self._audio_player)
            self.page.update()
        except AttributeError:
            # Flet builds without the Audio control
            self._play_with_system_player(abs_path)


def show_alert(page: ft.Page, title: str, message: str) -> None:
    """Show a blocking alert with a single OK button."""
    def close_dialog(_) -> None:
        dialog.open = False
        if dialog in page.overlay:
            page.overlay.remove(dialog)
        page.update()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[ft.TextButton("OK", on_click=close_dialog)],
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.overlay.append(dialog)
    dialog.open = True
    page.update()


def show_snackbar(page: ft.Page, message: str, error: bool = False) -> None:
    """Show a snackbar notification."""
    snackbar = ft.SnackBar(
        content=ft.Row(
            controls=[
                ft.Icon(ft.Icons.ERROR if error else ft.Icons.INFO, color=ft.Colors.WHITE, size=18),
                ft.Text(message, color=ft.Colors.WHITE),
            ],
            spacing=10,
        ),
        bgcolor=ft.Colors.RED_700 if error else ft.Colors.GREEN_700,
        duration=3000,
    )
    # Clean up old snackbars to prevent memory leak
    for ctrl in list(page.overlay):
        if isinstance(ctrl, ft.SnackBar):
            page.overlay.remove(ctrl)
    page.overlay.append(snackbar)
    snackbar.open = True
    page.update()
