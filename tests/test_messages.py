import pytest

from eventeye.controller.message_controller import list_inbox, mark_read, send_message, unread_count
from eventeye.errors import NotFoundError, PermissionDeniedError, ValidationError

from conftest import make_event, make_organizer, make_sponsor, run


@pytest.fixture
def parties(db):
    return make_sponsor(db), make_organizer(db)


def test_send_and_read_message(db, parties):
    sponsor, organizer = parties
    event = make_event(db, organizer)
    message = run(send_message(db, sponsor.profile, organizer.profile.id, "  Let's talk  ", event.id))
    assert message.content == "Let's talk"
    assert run(unread_count(db, organizer.profile)) == 1
    assert [m.id for m in run(list_inbox(db, organizer.profile))] == [message.id]

    first = run(mark_read(db, organizer.profile, message.id)).read_at
    assert first is not None
    assert run(mark_read(db, organizer.profile, message.id)).read_at == first
    assert run(unread_count(db, organizer.profile)) == 0


def test_only_recipient_marks_read(db, parties):
    sponsor, organizer = parties
    message = run(send_message(db, sponsor.profile, organizer.profile.id, "Hi"))
    with pytest.raises(PermissionDeniedError):
        run(mark_read(db, sponsor.profile, message.id))


def test_send_message_validation(db, parties):
    sponsor, organizer = parties
    with pytest.raises(ValidationError):
        run(send_message(db, sponsor.profile, organizer.profile.id, "   "))
    with pytest.raises(ValidationError):
        run(send_message(db, sponsor.profile, sponsor.profile.id, "Hi me"))
    with pytest.raises(NotFoundError):
        run(send_message(db, sponsor.profile, "nobody", "Hi"))
    with pytest.raises(NotFoundError):
        run(send_message(db, sponsor.profile, organizer.profile.id, "Hi", event_id="missing"))
