import uuid

import pytest

from gallery.client.identity import User
from gallery.client.state import (
    AuthorForm,
    AuthorsLoaded,
    BackToGallery,
    CloseForm,
    EditField,
    FormState,
    GalleryState,
    LoadFinished,
    Notice,
    NoticeDismissed,
    NoticeShown,
    OpenCreateForm,
    OpenEditForm,
    SelectAuthor,
    SessionEnded,
    SessionStarted,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    ToggleAdmin,
    reduce,
)
from gallery.schemas.author import AuthorRead

USER = User(token="t", email="admin@example.com")


def _author(name: str = "Abai") -> AuthorRead:
    return AuthorRead(
        id=uuid.uuid4(),
        name=name,
        birth_date="1845",
        death_date="1904",
        biography="Poet.",
        image_url=None,
    )


def _signed_in(**kw) -> GalleryState:
    return GalleryState(session=USER, loading=False, **kw)


class TestInitialState:
    def test_defaults(self):
        state = GalleryState()
        assert state.view == "gallery"
        assert state.loading is True
        assert state.session is None
        assert state.form == FormState()
        assert state.notice is None

    def test_state_is_immutable(self):
        with pytest.raises(Exception):
            GalleryState().view = "admin"


class TestLoading:
    def test_authors_loaded(self):
        authors = (_author(), _author("Shakarim"))

        state = reduce(GalleryState(), AuthorsLoaded(authors=authors))

        assert state.authors == authors
        assert state.loading is False

    def test_load_finished_without_data(self):
        state = reduce(GalleryState(), LoadFinished())
        assert state.loading is False
        assert state.authors == ()

    def test_reload_refreshes_selected(self):
        author = _author()
        state = reduce(GalleryState(loading=False, authors=(author,)), SelectAuthor(author=author))
        renamed = author.model_copy(update={"name": "Abai Qunanbaiuly"})

        state = reduce(state, AuthorsLoaded(authors=(renamed,)))

        assert state.view == "detail"
        assert state.selected.name == "Abai Qunanbaiuly"

    def test_reload_without_selected_leaves_detail(self):
        author = _author()
        state = reduce(GalleryState(loading=False, authors=(author,)), SelectAuthor(author=author))

        state = reduce(state, AuthorsLoaded(authors=()))

        assert state.view == "gallery"
        assert state.selected is None


class TestViews:
    def test_select_author_opens_detail(self):
        author = _author()
        state = reduce(GalleryState(), SelectAuthor(author=author))
        assert state.view == "detail"
        assert state.selected == author

    def test_detail_returns_to_gallery(self):
        state = reduce(GalleryState(), SelectAuthor(author=_author()))
        assert reduce(state, BackToGallery()).view == "gallery"

    def test_detail_not_reachable_from_admin(self):
        state = _signed_in(view="admin")
        assert reduce(state, SelectAuthor(author=_author())).view == "admin"

    def test_admin_requires_session(self):
        state = reduce(GalleryState(), ToggleAdmin())
        assert state.view == "gallery"

    def test_admin_toggles(self):
        state = reduce(_signed_in(), ToggleAdmin())
        assert state.view == "admin"
        assert reduce(state, ToggleAdmin()).view == "gallery"


class TestSession:
    def test_session_started(self):
        state = reduce(GalleryState(), SessionStarted(user=USER))
        assert state.session == USER

    def test_logout_forces_gallery(self):
        state = reduce(_signed_in(), ToggleAdmin())
        state = reduce(state, OpenCreateForm())

        state = reduce(state, SessionEnded())

        assert state.session is None
        assert state.view == "gallery"
        assert state.form.open is False


class TestForm:
    def test_create_form_requires_session(self):
        assert reduce(GalleryState(), OpenCreateForm()).form.open is False

    def test_open_create_form_is_blank(self):
        state = _signed_in(form=FormState(data=AuthorForm(name="left over")))

        state = reduce(state, OpenCreateForm())

        assert state.form.open is True
        assert state.form.is_editing is False
        assert state.form.data == AuthorForm()

    def test_open_edit_form_copies_author(self):
        author = _author()

        state = reduce(_signed_in(), OpenEditForm(author=author))

        assert state.form.is_editing is True
        assert state.form.data.id == str(author.id)
        assert state.form.data.name == "Abai"
        assert state.form.data.image_url is None
        assert state.form.data.birth_date == "1845"

    def test_edit_field(self):
        state = reduce(_signed_in(), OpenCreateForm())

        state = reduce(state, EditField(field="name", value="Abai"))

        assert state.form.data.name == "Abai"

    def test_edit_field_ignored_when_closed(self):
        state = reduce(_signed_in(), EditField(field="name", value="Abai"))
        assert state.form.data.name == ""

    @pytest.mark.parametrize("field", ["id", "nickname"])
    def test_edit_field_rejects_unknown(self, field):
        state = reduce(_signed_in(), OpenCreateForm())
        with pytest.raises(ValueError):
            reduce(state, EditField(field=field, value="x"))

    def test_close_form_resets(self):
        state = reduce(_signed_in(), OpenEditForm(author=_author()))
        assert reduce(state, CloseForm()).form == FormState()

    def test_submit_success_closes_form(self):
        state = reduce(_signed_in(), OpenCreateForm())
        state = reduce(state, SubmitStarted())
        assert state.is_submitting is True

        state = reduce(state, SubmitSucceeded())

        assert state.is_submitting is False
        assert state.form.open is False

    def test_submit_failure_keeps_input(self):
        state = reduce(_signed_in(), OpenCreateForm())
        state = reduce(state, EditField(field="name", value="Abai"))
        state = reduce(state, SubmitStarted())

        state = reduce(state, SubmitFailed())

        assert state.is_submitting is False
        assert state.form.open is True
        assert state.form.data.name == "Abai"


class TestPayload:
    def test_create_payload_has_no_id(self):
        form = AuthorForm(name="Abai", biography="Poet.")
        assert form.payload(include_id=False) == {
            "name": "Abai",
            "birthDate": None,
            "deathDate": None,
            "biography": "Poet.",
            "imageUrl": None,
        }

    def test_edit_payload_is_full_record(self):
        author_id = str(uuid.uuid4())
        form = AuthorForm(id=author_id, name="Abai", biography="Poet.")
        assert form.payload(include_id=True)["id"] == author_id


class TestNotices:
    def test_notice_shown_and_dismissed(self):
        notice = Notice(seq=1, kind="success", message="Added")
        state = reduce(GalleryState(), NoticeShown(notice=notice))
        assert state.notice == notice

        assert reduce(state, NoticeDismissed(seq=1)).notice is None

    def test_stale_dismissal_keeps_newer_notice(self):
        state = reduce(GalleryState(), NoticeShown(notice=Notice(seq=1, kind="success", message="Added")))
        state = reduce(state, NoticeShown(notice=Notice(seq=2, kind="error", message="Boom")))

        state = reduce(state, NoticeDismissed(seq=1))

        assert state.notice.message == "Boom"
