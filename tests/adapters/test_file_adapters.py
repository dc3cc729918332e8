"""Tests for the JSON listing cache and the wants list directory."""

import json

import pytest

from mathtrade.adapters.cache import JsonListingCache
from mathtrade.adapters.submissions import DirectorySubmissionSource
from mathtrade.core.domain import ListingId
from mathtrade.core.ports import (
    CachedListing,
    ListingNotFoundError,
    RawComment,
    RawEntry,
    RawListing,
    SubmissionNotFoundError,
)


@pytest.fixture
def cached_listing():
    raw = RawListing(
        listing_id="1234",
        title="Trade",
        entries=(
            RawEntry("501", "alice", "13", "Catan", "ok", (
                RawComment("alice", "Plus [thing=822]Carcassonne[/thing]"),
            )),
            RawEntry("502", "bob", "822", "Carcassonne", "NIEAKTUALNE"),
        ),
    )
    return CachedListing(raw=raw, names={"13": "Catan", "822": "Carcassonne"})


class TestJsonListingCache:
    """Tests for JsonListingCache."""

    @pytest.fixture
    def cache(self, tmp_path):
        return JsonListingCache(tmp_path / "cache")

    def test_save_and_load(self, cache, cached_listing):
        listing_id = ListingId("1234")

        cache.save(listing_id, cached_listing)
        loaded = cache.load(listing_id)

        assert loaded == cached_listing
        assert cache.path_for(listing_id).name == "listing-1234.json"

    def test_file_is_utf8_json(self, cache, tmp_path):
        listing = CachedListing(RawListing("1", (RawEntry("1", "łukasz", "5", "Wsiąść do pociągu"),)))

        cache.save(ListingId("1"), listing)

        payload = json.loads((tmp_path / "cache" / "listing-1.json").read_text(encoding="utf-8"))
        assert payload["listing"]["entries"][0]["owner"] == "łukasz"

    def test_load_missing(self, cache):
        with pytest.raises(ListingNotFoundError):
            cache.load(ListingId("99"))

    @pytest.mark.parametrize("content", [
        "{not json",
        '{"version": 1}',
        '{"version": 99, "listing": {"listing_id": "1", "entries": []}}',
        '{"version": 1, "listing": {"listing_id": "1", "entries": [{"owner": "a"}]}}',
    ])
    def test_corrupt_file_counts_as_missing(self, cache, tmp_path, content):
        (tmp_path / "cache").mkdir()
        (tmp_path / "cache" / "listing-1.json").write_text(content, encoding="utf-8")

        with pytest.raises(ListingNotFoundError):
            cache.load(ListingId("1"))

    def test_delete(self, cache, cached_listing):
        listing_id = ListingId("1234")
        cache.save(listing_id, cached_listing)

        assert cache.delete(listing_id) is True
        assert cache.delete(listing_id) is False
        with pytest.raises(ListingNotFoundError):
            cache.load(listing_id)


class TestDirectorySubmissionSource:
    """Tests for DirectorySubmissionSource."""

    def test_candidates(self, tmp_path):
        (tmp_path / "bob.txt").write_text("", encoding="utf-8")
        (tmp_path / "alice.txt").write_text("", encoding="utf-8")
        (tmp_path / "notes.md").write_text("", encoding="utf-8")
        (tmp_path / "dir.txt").mkdir()

        source = DirectorySubmissionSource(tmp_path)

        assert [name for name, _ in source.candidates()] == ["alice", "bob"]

    def test_excluded_files_are_not_candidates(self, tmp_path):
        (tmp_path / "alice.txt").write_text("", encoding="utf-8")
        (tmp_path / "wants.txt").write_text("", encoding="utf-8")

        source = DirectorySubmissionSource(tmp_path, exclude=[tmp_path / "wants.txt"])

        assert [name for name, _ in source.candidates()] == ["alice"]

    def test_missing_directory_has_no_candidates(self, tmp_path):
        source = DirectorySubmissionSource(tmp_path / "nope")

        assert list(source.candidates()) == []

    def test_path_for(self, tmp_path):
        source = DirectorySubmissionSource(tmp_path, extension="txt")

        assert source.path_for("alice") == tmp_path / "alice.txt"

    def test_read_lines(self, tmp_path):
        path = tmp_path / "alice.txt"
        path.write_bytes("\ufeff# zażółć\r\n(alice) 1 : 2\r\n\n(alice) 3 :".encode("utf-8"))

        lines = DirectorySubmissionSource(tmp_path).open_for_reading(path)

        assert lines == ["# zażółć", "(alice) 1 : 2", "", "(alice) 3 :"]

    def test_read_non_utf8_file(self, tmp_path):
        path = tmp_path / "alice.txt"
        path.write_bytes("# łódź\n(alice) 1 : 2\n".encode("cp1250"))

        lines = DirectorySubmissionSource(tmp_path).open_for_reading(path)

        assert lines[0].startswith("# ") and "\ufffd" in lines[0]
        assert lines[1] == "(alice) 1 : 2"

    def test_read_missing_file(self, tmp_path):
        source = DirectorySubmissionSource(tmp_path)

        with pytest.raises(SubmissionNotFoundError):
            source.open_for_reading(source.path_for("ghost"))
