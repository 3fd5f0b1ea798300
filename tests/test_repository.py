import pytest

from vocabbox.services import CSVRepository, LearningListStore, SQLiteRepository
from vocabbox.services.repository import WORD_COLUMNS


def _row(word, meaning="", uuid=None):
    return {
        "UUID": uuid or f"uuid-{word}",
        "Word": word,
        "Phonetics": "",
        "PartOfSpeech": "noun",
        "Meaning": meaning,
        "Audio": "",
        "Image": None,
        "AddedAt": "2026-01-01T10:00:00",
    }


@pytest.fixture(params=["csv", "sqlite"])
def repo(request, tmp_path):
    if request.param == "csv":
        repository = CSVRepository(str(tmp_path / "words.csv"))
    else:
        repository = SQLiteRepository(str(tmp_path / "words.db"))
    repository.load()
    return repository


class TestRepository:
    def test_starts_empty(self, repo):
        assert repo.count() == 0
        assert repo.get_all().empty
        assert list(repo.get_all().columns) == WORD_COLUMNS

    def test_add_and_get(self, repo):
        assert repo.add_row(_row("apple", "A fruit")) == 0
        assert repo.add_row(_row("pear")) == 1

        row = repo.get_by_uuid("uuid-apple")
        assert row["Word"] == "apple"
        assert row["Image"] == ""
        assert list(repo.get_all()["Word"]) == ["apple", "pear"]

    def test_get_unknown_uuid(self, repo):
        assert repo.get_by_uuid("nope") is None

    def test_delete(self, repo):
        repo.add_row(_row("apple"))
        repo.add_row(_row("pear"))

        assert repo.delete_by_uuid("uuid-apple") is True
        assert repo.delete_by_uuid("uuid-apple") is False
        assert repo.count() == 1

    def test_search_word_and_meaning(self, repo):
        repo.add_row(_row("apple", "A round fruit"))
        repo.add_row(_row("carrot", "An orange root vegetable"))
        repo.add_row(_row("orange", "A citrus fruit"))

        assert set(repo.search("fruit")["Word"]) == {"apple", "orange"}
        assert set(repo.search("orange")["Word"]) == {"carrot", "orange"}
        assert repo.search("").empty


class TestCSVRepository:
    def test_missing_file_is_empty(self, tmp_path):
        repo = CSVRepository(str(tmp_path / "absent.csv"))

        assert repo.load() is False
        assert repo.count() == 0

    def test_round_trip_with_separator_in_text(self, tmp_path):
        path = tmp_path / "words.csv"
        repo = CSVRepository(str(path))
        repo.load()
        repo.add_row(_row("pipe", "a | character"))
        assert repo.is_dirty
        assert repo.save()
        assert not repo.is_dirty

        reloaded = CSVRepository(str(path))
        assert reloaded.load() is True
        assert reloaded.get_by_uuid("uuid-pipe")["Meaning"] == "a | character"

    def test_missing_columns_are_filled(self, tmp_path):
        path = tmp_path / "old.csv"
        path.write_text("UUID|Word|Meaning\nu1|apple|fruit\n", encoding="utf-8-sig")

        repo = CSVRepository(str(path))
        repo.load()

        row = repo.get_by_uuid("u1")
        assert row["Image"] == ""
        assert list(repo.get_all().columns) == WORD_COLUMNS


class TestSQLiteRepository:
    def test_duplicate_uuid_rejected(self, tmp_path):
        repo = SQLiteRepository(str(tmp_path / "words.db"))
        repo.load()

        assert repo.add_row(_row("apple")) == 0
        assert repo.add_row(_row("apple")) == -1
        assert repo.count() == 1

    def test_import_from_csv(self, tmp_path):
        csv_path = tmp_path / "words.csv"
        store = LearningListStore(csv_path=str(csv_path))
        store.load()
        for word in ("apple", "pear"):
            store.add_word(LearningListStore.to_draft({"Word": word, "Meaning": "fruit"}))

        repo = SQLiteRepository(str(tmp_path / "words.db"))
        repo.load()

        assert repo.import_from_csv(str(csv_path)) == 2
        assert list(repo.get_all()["Word"]) == ["apple", "pear"]
