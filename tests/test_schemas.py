import pytest
from pydantic import ValidationError

from secret_santa_api.app.schemas.drawing import Draw
from secret_santa_api.app.schemas.gift_exchange import GiftExchange
from secret_santa_api.app.schemas.participant import Participant, ParticipantChanges
from secret_santa_api.app.schemas.requests import (
    DrawingCreate,
    GiftExchangeCreate,
    ParticipantUpdate,
    RestrictionChange,
    UserDelete,
)
from secret_santa_api.app.schemas.results import UpdateResult
from secret_santa_api.app.schemas.user import User


class TestParticipant:
    def test_defaults(self):
        participant = Participant(name="Alice")
        assert participant.id
        assert participant.email == ""
        assert participant.secret_draw == ""
        assert participant.restrictions == []

    def test_wire_names(self):
        participant = Participant.model_validate(
            {"_id": "p1", "name": " Alice ", "secretDraw": "Bob", "email": "alice@example.com"}
        )
        assert participant.name == "Alice"
        document = participant.to_document()
        assert document["_id"] == "p1"
        assert document["secretDraw"] == "Bob"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            Participant(name="Alice", email="not-an-email")

    def test_display_name_email_rejected(self):
        with pytest.raises(ValidationError):
            Participant(name="Alice", email="Alice <alice@example.com>")

    def test_bare_email_stored_as_address(self):
        assert Participant(name="Alice", email=" alice@example.com ").email == "alice@example.com"

    def test_blank_email_allowed(self):
        assert Participant(name="Alice", email="   ").email == ""
        assert Participant(name="Alice", email=None).email == ""

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Participant(name="   ")

    def test_restrictions_deduplicated(self):
        participant = Participant(name="Alice", restrictions=["Bob", "Carol", "Bob"])
        assert participant.restrictions == ["Bob", "Carol"]


class TestParticipantChanges:
    def test_only_sent_fields_assigned(self):
        changes = ParticipantChanges.model_validate({"secretDraw": ""})
        assert changes.assignments() == {"secretDraw": ""}

    def test_null_secret_draw_clears(self):
        changes = ParticipantChanges.model_validate({"secretDraw": None, "email": ""})
        assert changes.assignments() == {"secretDraw": "", "email": ""}

    def test_name_is_stripped(self):
        changes = ParticipantChanges.model_validate({"name": "  Alicia "})
        assert changes.assignments() == {"name": "Alicia"}

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_empty_name_rejected(self, name):
        with pytest.raises(ValidationError):
            ParticipantChanges.model_validate({"name": name})

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            ParticipantChanges.model_validate({"email": "nope"})


class TestDocuments:
    def test_user_round_trip_keeps_version(self):
        user = User.model_validate(
            {
                "_id": "u1",
                "email": "a@example.com",
                "__v": 3,
                "giftExchanges": [{"_id": "x1", "name": "Office", "draws": []}],
            }
        )
        assert user.version == 3
        assert user.gift_exchanges[0].name == "Office"
        document = user.to_document()
        assert document["__v"] == 3
        assert document["giftExchanges"][0]["_id"] == "x1"

    def test_gift_exchange_name_required(self):
        with pytest.raises(ValidationError):
            GiftExchange(name=" ")

    def test_update_result_aliases(self):
        result = UpdateResult(matched_count=1, modified_count=0)
        assert result.model_dump(by_alias=True) == {
            "acknowledged": True,
            "matchedCount": 1,
            "modifiedCount": 0,
        }


class TestRequests:
    def test_user_delete_accepts_id_spellings(self):
        assert UserDelete.model_validate({"_id": "u1"}).user_id == "u1"
        assert UserDelete.model_validate({"userId": "u2"}).user_id == "u2"

    def test_gift_exchange_create_accepts_underscore_id(self):
        assert GiftExchangeCreate.model_validate({"_id": "u1", "name": "x"}).user_id == "u1"

    def test_unknown_fields_ignored(self):
        details = DrawingCreate.model_validate({"userId": "u1", "color": "red"})
        assert details.user_id == "u1"
        assert details.drawing_year is None

    def test_wire_names(self):
        assert RestrictionChange.wire_name("participant_id") == "participantId"
        assert RestrictionChange.wire_name("restriction_name") == "restrictionName"
        assert DrawingCreate.wire_name("drawing_year") == "drawingYear"
        assert ParticipantUpdate.wire_name("updates") == "updates"

    @pytest.mark.parametrize("year", [True, "2024", 2024.5])
    def test_drawing_year_must_be_an_integer(self, year):
        with pytest.raises(ValidationError):
            DrawingCreate.model_validate({"drawingYear": year})

    def test_raw_value_follows_alias_order(self):
        assert GiftExchangeCreate.raw_value({"_id": "u2", "userId": "u1"}, "user_id") == "u1"
        assert GiftExchangeCreate.raw_value({"user_id": "u3"}, "user_id") == "u3"
        assert DrawingCreate.raw_value({"drawingYear": "abc"}, "drawing_year") == "abc"
        assert DrawingCreate.raw_value({}, "drawing_year") is None


class TestDraw:
    def test_boolean_year_rejected(self):
        with pytest.raises(ValidationError):
            Draw(year=True)
