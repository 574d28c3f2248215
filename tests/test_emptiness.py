from reactioneditor.model.codec import decode, encode, message_type
from reactioneditor.model.emptiness import is_empty_message
from reactioneditor.model.schema import Mass, Reaction, ReactionInput, Vessel, VesselType


def test_none_and_empty_scalars():
    assert is_empty_message(None)
    assert is_empty_message("")
    assert not is_empty_message("x")
    assert is_empty_message([])
    assert is_empty_message({})


def test_default_records_are_empty():
    assert is_empty_message(Vessel())
    assert is_empty_message(Reaction())
    assert is_empty_message(ReactionInput())


def test_any_set_field_makes_a_record_present():
    assert not is_empty_message(Vessel(details="500 mL flask"))
    assert not is_empty_message(Vessel(type=VesselType.VIAL))
    # Explicitly set zero is still a value.
    assert not is_empty_message(Mass(value=0.0))


def test_encoding_leaves_out_unset_optionals():
    payload = encode(Reaction(reaction_id="ord-1"))
    assert b"setup" not in payload
    assert decode(Reaction, payload) == Reaction(reaction_id="ord-1")
    assert message_type("ReactionSetup").__name__ == "ReactionSetup"
