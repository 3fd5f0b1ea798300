"""Tests for the Add Word screen behaviour."""

import asyncio
from dataclasses import replace

from vocabbox.models import WordDraft
from vocabbox.services import PermissionStatus
from vocabbox.ui.add_word_controller import (
    ALL_WORDS_ROUTE,
    PERMISSION_ALERT_MESSAGE,
    PERMISSION_ALERT_TITLE,
)

# Comfortably longer than the 50 ms debounce used by the controller fixture
SETTLE = 0.2


async def _load(controller, fake_lookup, draft: WordDraft) -> None:
    fake_lookup.results[draft.search_text] = draft
    controller.on_change_text(draft.search_text)
    await asyncio.sleep(SETTLE)
    assert controller.draft == draft


class TestSearch:
    """Debounced lookup."""

    async def test_lookup_result_becomes_draft(self, controller, fake_lookup, apple):
        await _load(controller, fake_lookup, apple)

        assert controller.image == apple.image
        assert controller.is_looking_up is False

    async def test_changing_text_clears_result_immediately(self, controller, fake_lookup, apple):
        await _load(controller, fake_lookup, apple)

        controller.on_change_text("apples")

        assert controller.draft is None
        assert controller.text == "apples"

    async def test_no_lookup_before_delay(self, controller, fake_lookup):
        controller.on_change_text("apple")
        await asyncio.sleep(0.01)

        assert fake_lookup.calls == []

    async def test_only_last_stable_value_is_looked_up(self, controller, fake_lookup):
        for text in ("a", "ap", "app", "appl", "apple"):
            controller.on_change_text(text)
            await asyncio.sleep(0.005)

        await asyncio.sleep(SETTLE)

        assert fake_lookup.calls == ["apple"]

    async def test_not_found_leaves_no_result(self, controller, fake_lookup):
        controller.on_change_text("qwxz")
        await asyncio.sleep(SETTLE)

        assert fake_lookup.calls == ["qwxz"]
        assert controller.draft is None
        assert controller.image is None

    async def test_empty_text_cancels_pending_lookup(self, controller, fake_lookup):
        controller.on_change_text("apple")
        controller.on_change_text("")
        await asyncio.sleep(SETTLE)

        assert fake_lookup.calls == []
        assert controller.is_looking_up is False

    async def test_stale_result_never_overwrites_newer_draft(self, controller, fake_lookup, apple):
        slow = WordDraft(search_text="slow", word="slow")
        fake_lookup.results["slow"] = slow
        fake_lookup.results["apple"] = apple
        fake_lookup.delays["slow"] = 0.3

        controller.on_change_text("slow")
        await asyncio.sleep(0.1)  # "slow" lookup is now in flight
        assert fake_lookup.calls == ["slow"]

        controller.on_change_text("apple")
        await asyncio.sleep(0.5)

        assert controller.draft == apple

    async def test_lookup_failure_is_treated_as_no_result(self, controller, fake_lookup, mocker):
        mocker.patch.object(fake_lookup, "get_word_info", side_effect=RuntimeError("boom"))

        controller.on_change_text("apple")
        await asyncio.sleep(SETTLE)

        assert controller.draft is None
        assert controller.is_looking_up is False

    async def test_listeners_notified(self, controller, fake_lookup, apple):
        notified = []
        controller.on_change(lambda: notified.append(controller.draft))

        await _load(controller, fake_lookup, apple)

        # once for the keystroke, once for the result
        assert notified == [None, apple]

    async def test_title_follows_draft(self, controller, fake_lookup, apple):
        assert controller.title == "Adding word"

        await _load(controller, fake_lookup, apple)

        assert controller.title == 'Adding word "apple"'


class TestPickImage:
    """Permission-gated photo library."""

    async def test_denied_permission_shows_alert_only(self, controller, fake_lookup, fake_picker, alerts, apple):
        await _load(controller, fake_lookup, apple)
        fake_picker.status = PermissionStatus.DENIED
        notified = []
        controller.on_change(lambda: notified.append(True))

        picked = await controller.pick_image()

        assert picked is False
        assert alerts == [(PERMISSION_ALERT_TITLE, PERMISSION_ALERT_MESSAGE)]
        assert fake_picker.launches == 0
        assert controller.draft == apple
        assert controller.image == apple.image
        assert notified == []

    async def test_undetermined_permission_is_not_a_grant(self, controller, fake_picker, alerts):
        fake_picker.status = PermissionStatus.UNDETERMINED

        assert await controller.pick_image() is False
        assert len(alerts) == 1
        assert fake_picker.launches == 0

    async def test_picked_image_updates_only_image_field(self, controller, fake_lookup, fake_picker, apple):
        await _load(controller, fake_lookup, apple)
        fake_picker.uri = "/photos/my_apple.png"

        assert await controller.pick_image() is True

        assert controller.image == "/photos/my_apple.png"
        assert controller.draft == replace(apple, image="/photos/my_apple.png")

    async def test_cancelled_picker_changes_nothing(self, controller, fake_lookup, fake_picker, alerts, apple):
        await _load(controller, fake_lookup, apple)
        fake_picker.uri = None

        assert await controller.pick_image() is False

        assert controller.draft == apple
        assert controller.image == apple.image
        assert alerts == []

    async def test_pick_without_draft_sets_preview_only(self, controller, fake_picker):
        assert await controller.pick_image() is True

        assert controller.image == fake_picker.uri
        assert controller.draft is None

    async def test_new_lookup_discards_picked_image(self, controller, fake_lookup, apple):
        await _load(controller, fake_lookup, apple)
        await controller.pick_image()

        pear = WordDraft(search_text="pear", word="pear", image=None)
        await _load(controller, fake_lookup, pear)

        assert controller.image is None


class TestAdd:
    """Submitting the draft."""

    def test_add_unavailable_without_draft(self, controller, store, navigation):
        assert controller.can_add is False
        assert controller.add() is False
        assert store.count == 0
        assert navigation == []

    async def test_add_unavailable_without_word(self, controller, fake_lookup):
        await _load(controller, fake_lookup, WordDraft(search_text="x", word="", meaning="?"))

        assert controller.can_add is False
        assert controller.add() is False

    async def test_add_dispatches_once_and_leaves(self, controller, fake_lookup, store, navigation, apple, mocker):
        await _load(controller, fake_lookup, apple)
        spy = mocker.spy(store, "add_word")

        assert controller.can_add is True
        assert controller.add() is True

        spy.assert_called_once_with(apple)
        assert navigation == [ALL_WORDS_ROUTE]
        assert store.count == 1

    async def test_add_keeps_picked_image(self, controller, fake_lookup, store, apple):
        await _load(controller, fake_lookup, apple)
        await controller.pick_image()

        controller.add()

        assert store.entries()[0]["Image"] == "/photos/cat.jpg"

    async def test_already_in_list(self, controller, fake_lookup, store, apple):
        store.add_word(apple)

        await _load(controller, fake_lookup, apple)

        assert controller.already_in_list is True

    async def test_reset_clears_screen(self, controller, fake_lookup, apple):
        await _load(controller, fake_lookup, apple)

        controller.reset()

        assert (controller.text, controller.draft, controller.image) == ("", None, None)


class TestPlayAudio:
    async def test_plays_draft_audio(self, controller, fake_lookup, fake_sound, apple):
        await _load(controller, fake_lookup, apple)

        assert await controller.play_audio() is True
        assert fake_sound.played == [apple.audio]

    async def test_nothing_to_play(self, controller, fake_lookup, fake_sound):
        await _load(controller, fake_lookup, WordDraft(search_text="hm", word="hm"))

        assert await controller.play_audio() is False
        assert fake_sound.played == []
