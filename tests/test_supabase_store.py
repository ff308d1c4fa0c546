"""Tests for the Supabase record store adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from conftest import COLLEGE
from visitorlog.schemas.visitor import VisitorCreate
from visitorlog.store.base import SessionEvent
from visitorlog.store.supabase_store import VISITORS_TABLE, SupabaseRecordStore
from visitorlog.utils.exceptions import AuthenticationError, RecordStoreError, SubmissionError

ROW = {
    "id": 7,
    "name": "Amy",
    "mobile_number": "0123456789",
    "college": None,
    "person_to_meet": "Dr. Rao",
    "purpose_of_visit": "Campus tour",
    "comment_feedback": None,
    "latitude": None,
    "longitude": None,
    "in_time": "2024-01-03T10:00:00+00:00",
}


def _auth_session(token="jwt-token", email="admin@exploreit.test", user_id="uuid-1"):
    return SimpleNamespace(access_token=token, user=SimpleNamespace(email=email, id=user_id))


@pytest.fixture
def client():
    return MagicMock()


def test_list_records_queries_newest_first(client):
    query = client.table.return_value.select.return_value.order.return_value
    query.execute.return_value = SimpleNamespace(data=[ROW])

    [record] = SupabaseRecordStore(client).list_records()

    client.table.assert_called_once_with(VISITORS_TABLE)
    client.table.return_value.select.return_value.order.assert_called_once_with("in_time", desc=True)
    assert record.id == "7"
    assert record.college is None


def test_list_records_skips_rows_without_id(client, caplog):
    query = client.table.return_value.select.return_value.order.return_value
    query.execute.return_value = SimpleNamespace(data=[{**ROW, "id": None}, ROW])

    records = SupabaseRecordStore(client).list_records()
    assert len(records) == 1
    assert "Skipping malformed visitor row" in caplog.text


def test_list_records_wraps_client_errors(client):
    client.table.side_effect = ConnectionError("offline")
    with pytest.raises(RecordStoreError):
        SupabaseRecordStore(client).list_records()


def test_insert_sends_wire_field_names(client):
    visitor = VisitorCreate(
        name="Amy",
        mobile_number="0123456789",
        college=COLLEGE,
        person_to_meet="Dr. Rao",
        purpose_of_visit="Campus tour",
    )
    SupabaseRecordStore(client).insert_record(visitor)

    payload = client.table.return_value.insert.call_args.args[0]
    assert set(payload) == {
        "name", "mobile_number", "college", "person_to_meet", "purpose_of_visit",
        "comment_feedback", "latitude", "longitude",
    }


def test_insert_wraps_client_errors(client):
    client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("denied")
    visitor = VisitorCreate(
        name="Amy",
        mobile_number="0123456789",
        college=COLLEGE,
        person_to_meet="Dr. Rao",
        purpose_of_visit="Campus tour",
    )
    with pytest.raises(SubmissionError):
        SupabaseRecordStore(client).insert_record(visitor)


def test_sign_in_maps_session(client):
    client.auth.sign_in_with_password.return_value = SimpleNamespace(session=_auth_session())
    session = SupabaseRecordStore(client).sign_in("admin@exploreit.test", "secret")
    assert session.access_token == "jwt-token"
    assert session.user_id == "uuid-1"
    client.auth.sign_in_with_password.assert_called_once_with(
        {"email": "admin@exploreit.test", "password": "secret"}
    )


def test_sign_in_failure(client):
    client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
    with pytest.raises(AuthenticationError, match="Invalid login credentials"):
        SupabaseRecordStore(client).sign_in("admin@exploreit.test", "wrong")


def test_sign_in_without_session(client):
    client.auth.sign_in_with_password.return_value = SimpleNamespace(session=None)
    with pytest.raises(AuthenticationError):
        SupabaseRecordStore(client).sign_in("admin@exploreit.test", "secret")


def test_sign_out_failure_is_logged(client, caplog):
    client.auth.sign_out.side_effect = RuntimeError("timeout")
    SupabaseRecordStore(client).sign_out("jwt-token")
    assert "Sign-out request failed" in caplog.text


def test_current_session_from_token(client):
    client.auth.get_user.return_value = SimpleNamespace(
        user=SimpleNamespace(email="admin@exploreit.test", id="uuid-1")
    )
    store = SupabaseRecordStore(client)
    session = store.current_session("jwt-token")
    assert session.email == "admin@exploreit.test"
    assert store.current_session(None) is None

    client.auth.get_user.side_effect = Exception("expired")
    assert store.current_session("jwt-token") is None


def test_session_changes_are_relayed(client):
    events = []
    SupabaseRecordStore(client).on_session_change(lambda event, session: events.append((event, session)))
    relay = client.auth.on_auth_state_change.call_args.args[0]

    relay("SIGNED_IN", _auth_session())
    relay("TOKEN_REFRESHED", _auth_session())
    relay(SimpleNamespace(value="SIGNED_OUT"), None)

    assert [event for event, _ in events] == [SessionEvent.SIGNED_IN, SessionEvent.SIGNED_OUT]
    assert events[0][1].access_token == "jwt-token"
    assert events[1][1] is None
