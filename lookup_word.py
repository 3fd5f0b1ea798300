"""
VocabBox: command-line lookup
-----------------------------

Look up a word and optionally append it to the learning list.

    python lookup_word.py serendipity
    python lookup_word.py serendipity --add
"""

import argparse
import asyncio
import logging
import sys

from vocabbox.config import Config, SettingsManager
from vocabbox.services import LearningListStore, StorageBackend, WordLookupService
from vocabbox.utils import setup_logger

logger = logging.getLogger(__name__)


async def main(word: str, add: bool) -> bool:
    """Main entry point."""
    settings = SettingsManager()

    async with WordLookupService(tts_fallback=settings.get("TTS_FALLBACK", False)) as lookup:
        draft = await lookup.get_word_info(word)

    if draft is None:
        print(f"No dictionary entry for {word!r}")
        return False

    print(f"{draft.word}  {draft.phonetics}")
    if draft.part_of_speech:
        print(f"({draft.part_of_speech})")
    print(draft.meaning)
    if draft.audio:
        print(f"audio: {draft.audio}")
    if draft.image:
        print(f"image: {draft.image}")

    if add:
        store = LearningListStore(
            csv_path=Config.WORDS_CSV_FILE,
            backend=StorageBackend.parse(settings.get("STORAGE_BACKEND", "csv")),
            db_path=Config.WORDS_DB_FILE,
        )
        await store.load_async()
        if store.add_word(draft) is None:
            print("[ERROR] Could not add the word")
            return False
        print(f"Added to the learning list ({store.count} words)")

    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Look up a word in the dictionary.")
    parser.add_argument("word")
    parser.add_argument("--add", action="store_true", help="append the result to the learning list")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logger(args.log_level)
    try:
        success = asyncio.run(main(args.word, args.add))
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n[!] Aborted by user.")
        sys.exit(1)
