import pytest

from vocabbox.fetchers import AudioFetcher
from vocabbox.services import SoundService
from vocabbox.utils import MediaPathGenerator

REMOTE = "https://api.dictionaryapi.dev/media/pronunciations/en/apple-us.mp3"


class TestAudioFetcher:
    async def test_local_path(self, tmp_path):
        clip = tmp_path / "clip.mp3"
        clip.write_bytes(b"\x00" * 10)

        assert await AudioFetcher().fetch(str(clip)) == str(clip)
        assert await AudioFetcher().fetch(str(tmp_path / "missing.mp3")) is None

    async def test_empty_reference(self):
        assert await AudioFetcher().fetch("") is None

    async def test_remote_downloaded_into_cache(self, mocker, media_dir):
        fetcher = AudioFetcher()
        download = mocker.patch.object(fetcher, "download", return_value=True)

        path = await fetcher.fetch(REMOTE)

        assert path == MediaPathGenerator.audio_cache_path(REMOTE)
        assert path.startswith(str(media_dir))
        download.assert_awaited_once_with(REMOTE, path)

    async def test_cached_file_reused(self, mocker, media_dir):
        cached = MediaPathGenerator.audio_cache_path(REMOTE)
        media_dir.mkdir(parents=True)
        with open(cached, "wb") as f:
            f.write(b"\x01" * 500)

        fetcher = AudioFetcher()
        download = mocker.patch.object(fetcher, "download")

        assert await fetcher.fetch(REMOTE) == cached
        download.assert_not_called()

    async def test_failed_download(self, mocker):
        fetcher = AudioFetcher()
        mocker.patch.object(fetcher, "download", return_value=False)

        assert await fetcher.fetch(REMOTE) is None

    async def test_pronounce_uses_tts_cache(self, mocker):
        fetcher = AudioFetcher()
        synthesize = mocker.patch.object(fetcher, "synthesize", return_value=True)

        path = await fetcher.pronounce("Apple")

        assert path == MediaPathGenerator.audio_tts_path("Apple")
        synthesize.assert_awaited_once_with("Apple", path)

    async def test_pronounce_cache_is_per_voice(self, mocker):
        fetcher = AudioFetcher(voice="en-US-AriaNeural")
        synthesize = mocker.patch.object(fetcher, "synthesize", return_value=True)

        path = await fetcher.pronounce("apple")

        assert path == MediaPathGenerator.audio_tts_path("apple", "en-US-AriaNeural")
        assert path != MediaPathGenerator.audio_tts_path("apple")
        synthesize.assert_awaited_once_with("apple", path)

    async def test_pronounce_blank(self, mocker):
        fetcher = AudioFetcher()
        synthesize = mocker.patch.object(fetcher, "synthesize")

        assert await fetcher.pronounce("  ") is None
        synthesize.assert_not_called()


class TestSoundService:
    @pytest.fixture
    def fetcher(self, mocker):
        fetcher = mocker.create_autospec(AudioFetcher, instance=True)
        fetcher.fetch.return_value = "/media/_snd_apple.mp3"
        return fetcher

    async def test_plays_resolved_file(self, mocker, fetcher):
        player = mocker.Mock()
        sound = SoundService(player=player, fetcher=fetcher)

        assert await sound.play(REMOTE) is True

        fetcher.fetch.assert_awaited_once_with(REMOTE)
        player.assert_called_once_with("/media/_snd_apple.mp3")

    async def test_no_audio(self, mocker, fetcher):
        player = mocker.Mock()
        sound = SoundService(player=player, fetcher=fetcher)

        assert await sound.play(None) is False
        player.assert_not_called()

    async def test_no_player(self, fetcher):
        sound = SoundService(fetcher=fetcher)

        assert await sound.play(REMOTE) is False
        fetcher.fetch.assert_not_called()

    async def test_unavailable_audio(self, mocker, fetcher):
        fetcher.fetch.return_value = None
        player = mocker.Mock()
        sound = SoundService(fetcher=fetcher)
        sound.set_player(player)

        assert await sound.play(REMOTE) is False
        player.assert_not_called()

    async def test_close(self, fetcher):
        sound = SoundService(fetcher=fetcher)

        await sound.close()

        fetcher.close.assert_awaited_once()
