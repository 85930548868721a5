"""
Tests for the JSON File Store
"""

from datetime import datetime

import pytest

from form_toolkit.core.models import CompanySettings, Field, FormDocument, Section, UserContext
from form_toolkit.core.schemas import ValidationError
from form_toolkit.storage import JsonFormStore, StorageError
from form_toolkit.validation import SubmissionBlockedError


@pytest.fixture
def store(tmp_path):
    return JsonFormStore(tmp_path / "data")


@pytest.fixture
def required_form():
    return FormDocument(
        title="Daily Check",
        blocks=(
            Section(
                "s1",
                "Checks",
                children=(
                    Field("reg", "Registration", required=True),
                    Field("notes", "Notes"),
                ),
            ),
        ),
    )


@pytest.fixture
def user():
    return UserContext(user_id="u1", display_name="Jane Pilot")


class TestForms:
    def test_save_then_load_returns_same_form(self, store, simple_form):
        store.save_form("simple", simple_form)
        assert store.load_form("simple") == simple_form

    def test_create_form_assigns_id_and_persists(self, store):
        form = store.create_form("Daily Inspection", department="Ops")

        assert form.id
        assert store.load_form(form.id) == form
        assert not form.published
        assert form.header_on_all_pages

    def test_list_forms_sorted_by_title(self, store):
        store.create_form("beta")
        store.create_form("Alpha")

        assert [f.title for f in store.list_forms()] == ["Alpha", "beta"]

    def test_list_forms_empty_store(self, store):
        assert store.list_forms() == []
        assert store.list_forms(published_only=True) == []

    def test_when_missing_then_storage_error(self, store):
        with pytest.raises(StorageError, match="Not found"):
            store.load_form("nope")

    @pytest.mark.parametrize("bad_id", ["", "../escape", "a/b", "x.json"])
    def test_when_id_unsafe_then_storage_error(self, store, simple_form, bad_id):
        with pytest.raises(StorageError, match="Invalid form id"):
            store.save_form(bad_id, simple_form)

    def test_when_stored_document_invalid_then_validation_error(self, store):
        path = store.root / "forms" / "broken.json"
        path.parent.mkdir(parents=True)
        path.write_text('{"title": "Broken", "blocks": []}', encoding="utf-8")

        with pytest.raises(ValidationError):
            store.load_form("broken")


class TestPublishing:
    def test_publish_bumps_revision_and_writes_snapshot(self, store):
        form = store.create_form("Daily Inspection")

        published = store.publish_form(form.id)

        assert str(published.revision) == "1.1"
        assert store.load_published_form(form.id) == published
        assert store.load_form(form.id).published

    def test_edits_after_publish_stay_out_of_snapshot(self, store):
        form = store.create_form("Daily Inspection")
        published = store.publish_form(form.id)

        edited = published.with_blocks(published.blocks + (Section("s2", "Extra"),))
        store.save_form(form.id, edited)

        assert store.load_form(form.id).has_pending_changes
        assert len(store.load_published_form(form.id).blocks) == 1

    def test_list_published_only(self, store):
        draft = store.create_form("Draft")
        live = store.create_form("Live")
        store.publish_form(live.id)

        titles = [f.title for f in store.list_forms(published_only=True)]
        assert titles == ["Live"]
        assert draft.id not in [f.id for f in store.list_forms(published_only=True)]

    def test_unpublished_form_has_no_snapshot(self, store):
        form = store.create_form("Draft")
        with pytest.raises(StorageError):
            store.load_published_form(form.id)


class TestAnswers:
    def test_load_when_nothing_saved_then_none(self, store):
        assert store.load_answers("form1", "u1") is None

    def test_save_then_load_answers(self, store):
        store.save_answers("form1", "u1", {"reg": "OY-ABC", "m": ("A", "B"), "b": False})
        assert store.load_answers("form1", "u1") == {"reg": "OY-ABC", "m": ("A", "B"), "b": False}

    def test_submit_blocked_when_required_missing(self, store, required_form, user):
        store.save_form("daily", required_form)
        store.publish_form("daily")

        with pytest.raises(SubmissionBlockedError) as exc_info:
            store.submit_answers("daily", user, {"notes": "all fine"})

        assert set(exc_info.value.errors) == {"reg"}
        assert store.list_submissions("daily") == []

    def test_submit_records_submission_and_clears_draft(self, store, required_form, user):
        store.save_form("daily", required_form)
        store.publish_form("daily")
        store.save_answers("daily", "u1", {"reg": "OY-ABC"})
        when = datetime(2024, 3, 1, 9, 30)

        submission = store.submit_answers("daily", user, {"reg": "OY-ABC"}, submitted_at=when)

        assert submission.submitted_by == "Jane Pilot"
        assert submission.revision == "1.1"
        assert store.load_answers("daily", "u1") is None
        assert store.list_submissions("daily") == [submission]

    def test_submit_against_unpublished_form_fails(self, store, required_form, user):
        store.save_form("daily", required_form)
        with pytest.raises(StorageError):
            store.submit_answers("daily", user, {"reg": "OY-ABC"})


class TestCompanySettings:
    def test_default_settings_when_none_saved(self, store):
        assert store.load_company_settings() == CompanySettings()

    def test_settings_round_trip_keeps_logo(self, store, company_settings):
        store.save_company_settings(company_settings)

        loaded = store.load_company_settings()

        assert loaded.name == company_settings.name
        assert loaded.approval_number == "DK.145.0001"
        assert loaded.logo.startswith("data:image/png;base64,")
