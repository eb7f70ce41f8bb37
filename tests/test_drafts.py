"""DraftStore tests — save/load round trips, expiry, corruption, and storage failures.

Time is controlled through the ``clock`` fixture (epoch ms) so expiry is
tested without sleeping.  Storage failures are simulated with a backend
whose every operation raises.
"""

import json
import logging

import pytest

from questionnaire_forms.drafts import DraftStore, storage_key
from questionnaire_forms.models.form import ContactData
from questionnaire_forms.storage import DraftStorage, FileStorage, InMemoryStorage

HOUR_MS = 60 * 60 * 1000

FORM = {"name": "Анна", "injuries": ["fractures", "spine"], "age": "34"}
ADDITIONAL = {"injuries_additional": "перелом руки в 2019"}
CONTACT = ContactData(method="instagram", username="@anna")


class BrokenStorage(DraftStorage):
    """Storage whose every operation fails, like a full or disabled localStorage."""

    def get_item(self, key):
        raise OSError("storage unavailable")

    def set_item(self, key, value):
        raise OSError("quota exceeded")

    def remove_item(self, key):
        raise OSError("storage unavailable")


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def drafts(storage, clock):
    return DraftStore(storage, clock=clock)


# =====================================================================
# Key derivation
# =====================================================================


def test_storage_key_format():
    """Key is derived from type and language only."""
    assert storage_key("woman", "ru") == "health_questionnaire_woman_ru"
    assert storage_key("infant", "en") == "health_questionnaire_infant_en"


# =====================================================================
# Round trip & expiry
# =====================================================================


class TestRoundTrip:

    def test_load_returns_saved_draft(self, drafts):
        """A fresh draft comes back unchanged."""
        assert drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT) is True
        draft = drafts.load("woman", "ru")
        assert draft is not None
        assert draft.form_data == FORM
        assert draft.additional_data == ADDITIONAL
        assert draft.contact_data == CONTACT

    def test_draft_is_stamped_with_clock(self, drafts, clock):
        """The stored timestamp is the clock value at save time."""
        drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT)
        assert drafts.load("woman", "ru").timestamp == clock.now

    def test_stored_json_layout(self, drafts, storage, clock):
        """Stored JSON uses the browser client's camelCase layout."""
        drafts.save("man", "en", FORM, ADDITIONAL, CONTACT)
        raw = json.loads(storage.get_item("health_questionnaire_man_en"))
        assert raw == {
            "formData": FORM,
            "additionalData": ADDITIONAL,
            "contactData": {"method": "instagram", "username": "@anna"},
            "timestamp": clock.now,
        }

    def test_save_overwrites_previous_draft(self, drafts):
        """Only the latest save is kept for a key."""
        drafts.save("woman", "ru", {"name": "first"}, {}, CONTACT)
        drafts.save("woman", "ru", {"name": "second"}, {}, CONTACT)
        assert drafts.load("woman", "ru").form_data == {"name": "second"}

    def test_keys_are_independent(self, drafts):
        """Drafts for different type/language pairs don't collide."""
        drafts.save("woman", "ru", {"name": "ru"}, {}, CONTACT)
        drafts.save("woman", "en", {"name": "en"}, {}, CONTACT)
        assert drafts.load("woman", "ru").form_data == {"name": "ru"}
        assert drafts.load("woman", "en").form_data == {"name": "en"}
        assert drafts.load("man", "ru") is None

    def test_just_under_ttl_is_fresh(self, drafts, clock):
        """A draft 1 ms short of 24 hours is still returned."""
        drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT)
        clock.advance(hours=24, ms=-1)
        assert drafts.load("woman", "ru") is not None

    def test_exactly_ttl_is_expired(self, drafts, clock):
        """A draft exactly 24 hours old is expired."""
        drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT)
        clock.advance(hours=24)
        result = drafts.load_result("woman", "ru")
        assert result.status == "expired"
        assert result.draft is None
        assert drafts.load("woman", "ru") is None

    def test_old_timestamp_in_storage_is_expired(self, drafts, storage, clock):
        """A stored timestamp far in the past is never returned."""
        storage.set_item(storage_key("child", "ru"), json.dumps({
            "formData": FORM, "additionalData": {}, "contactData": {},
            "timestamp": clock.now - 48 * HOUR_MS,
        }))
        assert drafts.load("child", "ru") is None

    def test_expired_entry_is_removed_from_storage(self, drafts, storage, clock):
        """Reading an expired draft deletes it so stale keys do not pile up."""
        drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT)
        clock.advance(hours=48)
        assert drafts.load_result("woman", "ru").status == "expired"
        assert storage.get_item(storage_key("woman", "ru")) is None
        assert drafts.load_result("woman", "ru").status == "missing"

    def test_custom_ttl(self, storage, clock):
        """ttl_ms overrides the 24 hour window."""
        short = DraftStore(storage, clock=clock, ttl_ms=1000)
        short.save("man", "ru", FORM, {}, CONTACT)
        clock.advance(ms=999)
        assert short.load("man", "ru") is not None
        clock.advance(ms=1)
        assert short.load("man", "ru") is None


# =====================================================================
# Missing / corrupt / failing storage
# =====================================================================


class TestDegradedStorage:

    def test_missing_draft(self, drafts):
        result = drafts.load_result("infant", "ru")
        assert result.status == "missing"
        assert not result.found

    @pytest.mark.parametrize("payload", [
        "{not json",
        "[]",
        json.dumps({"formData": {}}),
        json.dumps({"formData": {}, "timestamp": "yesterday"}),
        json.dumps({"formData": {}, "contactData": {"method": "fax"}, "timestamp": 1}),
    ])
    def test_corrupt_entry_is_no_draft(self, drafts, storage, payload):
        """Unparseable or malformed entries are treated as "no draft"."""
        storage.set_item(storage_key("woman", "ru"), payload)
        assert drafts.load_result("woman", "ru").status == "corrupt"
        assert drafts.load("woman", "ru") is None

    def test_corrupt_entry_is_removed_from_storage(self, drafts, storage):
        storage.set_item(storage_key("man", "en"), "{not json")
        assert drafts.load_result("man", "en").status == "corrupt"
        assert len(storage) == 0

    def test_save_failure_is_logged_not_raised(self, clock, caplog):
        """A failing backend makes save() return False and log an error."""
        drafts = DraftStore(BrokenStorage(), clock=clock)
        with caplog.at_level(logging.ERROR):
            assert drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT) is False
        assert "Error saving form data" in caplog.text

    def test_load_failure_is_no_draft(self, clock):
        drafts = DraftStore(BrokenStorage(), clock=clock)
        assert drafts.load("woman", "ru") is None

    def test_clear_failure_is_swallowed(self, clock, caplog):
        drafts = DraftStore(BrokenStorage(), clock=clock)
        with caplog.at_level(logging.ERROR):
            drafts.clear("woman", "ru")
        assert "Error clearing form data" in caplog.text

    def test_unserializable_answers_are_not_saved(self, drafts, storage):
        """Answers that fail validation are rejected without raising."""
        assert drafts.save("woman", "ru", {"age": object()}, {}, CONTACT) is False
        assert len(storage) == 0


# =====================================================================
# Clear
# =====================================================================


class TestClear:

    def test_clear_removes_draft(self, drafts):
        drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT)
        drafts.clear("woman", "ru")
        assert drafts.load("woman", "ru") is None

    def test_clear_missing_is_noop(self, drafts):
        drafts.clear("woman", "ru")
        assert drafts.load("woman", "ru") is None

    def test_clear_only_touches_its_key(self, drafts):
        drafts.save("woman", "ru", FORM, {}, CONTACT)
        drafts.save("woman", "en", FORM, {}, CONTACT)
        drafts.clear("woman", "ru")
        assert drafts.load("woman", "en") is not None


# =====================================================================
# FileStorage backend
# =====================================================================


class TestFileStorage:

    def test_round_trip_through_files(self, tmp_path, clock):
        """Drafts survive a new DraftStore over the same directory."""
        DraftStore(FileStorage(tmp_path), clock=clock).save(
            "man", "ru", FORM, ADDITIONAL, CONTACT,
        )
        assert (tmp_path / "health_questionnaire_man_ru.json").exists()

        draft = DraftStore(FileStorage(tmp_path), clock=clock).load("man", "ru")
        assert draft.form_data == FORM

    def test_expired_file_is_deleted(self, tmp_path, clock):
        drafts = DraftStore(FileStorage(tmp_path), clock=clock)
        drafts.save("woman", "ru", FORM, ADDITIONAL, CONTACT)
        clock.advance(hours=48)
        assert drafts.load("woman", "ru") is None
        assert list(tmp_path.iterdir()) == []

    def test_directory_created_on_first_write(self, tmp_path):
        storage = FileStorage(tmp_path / "nested" / "drafts")
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

    def test_remove_missing_file(self, tmp_path):
        FileStorage(tmp_path).remove_item("absent")

    def test_unsafe_key_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            FileStorage(tmp_path).set_item("../escape", "x")

    def test_unsafe_language_is_absorbed_by_store(self, tmp_path, clock):
        """A path-like language never writes outside the directory."""
        drafts = DraftStore(FileStorage(tmp_path), clock=clock)
        assert drafts.save("woman", "../ru", FORM, {}, CONTACT) is False
        assert list(tmp_path.iterdir()) == []
