import json

import pytest
import requests

from secret_santa_client import SecretSantaAPI


def _response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response


class FakeSession:
    """Records requests and answers them from a queue of responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        response.url = url
        return response


@pytest.fixture()
def make_api():
    def factory(*responses):
        session = FakeSession(*responses)
        return SecretSantaAPI(base_url="http://santa.test/", session=session), session

    return factory


def test_get_user_quotes_email(make_api):
    api, session = make_api(_response(200, {"_id": "u1", "email": "a+b@example.com"}))
    data, error = api.get_user("a+b@example.com")
    assert error is None
    assert data["_id"] == "u1"
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://santa.test/user/a%2Bb@example.com"


def test_delete_user_without_content(make_api):
    api, session = make_api(_response(204))
    assert api.delete_user("u1") == (None, None)
    assert session.calls[0]["json"] == {"_id": "u1"}


def test_error_message_from_body(make_api):
    api, _ = make_api(_response(409, {"Error": "Request failed. User with that email already exists."}))
    data, error = api.create_user("a@example.com")
    assert data is None
    assert error["status_code"] == 409
    assert error["message"].endswith("already exists.")


def test_not_modified_counts_are_returned(make_api):
    body = {
        "Error": "Resource not found or updated or restriction already existed.",
        "modifiedObj": {"acknowledged": True, "matchedCount": 1, "modifiedCount": 0},
    }
    api, session = make_api(_response(404, body))
    _, error = api.add_restriction("u1", "x1", "d1", "p1", "Bob")
    assert error["body"]["modifiedObj"]["modifiedCount"] == 0
    assert session.calls[0]["json"] == {
        "userId": "u1",
        "giftExchangeId": "x1",
        "drawingId": "d1",
        "participantId": "p1",
        "restrictionName": "Bob",
    }


def test_update_participant_sends_empty_values(make_api):
    api, session = make_api(_response(200, {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1}))
    data, error = api.update_participant("u1", "x1", "d1", "p1", {"secretDraw": ""})
    assert error is None
    assert data["modifiedCount"] == 1
    assert session.calls[0]["method"] == "PATCH"
    assert session.calls[0]["json"]["updates"] == {"secretDraw": ""}


def test_add_participant_payload(make_api):
    api, session = make_api(_response(201, {"_id": "u1"}))
    api.add_participant("u1", "x1", "d1", "Alice")
    assert session.calls[0]["url"] == "http://santa.test/participant"
    assert session.calls[0]["json"]["newParticipant"] == {"name": "Alice"}


def test_connection_error(make_api):
    api, _ = make_api(requests.ConnectionError("refused"))
    data, error = api.user_exists("a@example.com")
    assert data is None
    assert error["status_code"] is None
    assert "refused" in error["message"]
