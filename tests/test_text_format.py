import logging
import random

from mkvedit.core.fields import ALL_KEYS, HEADER_KEYS, ORDERING, TAG_KEYS, Field
from mkvedit.core.text_format import decode, drop_empty, encode, format_header


def test_field_tables_match_wire_keys():
    assert HEADER_KEYS == ("title",)
    assert set(TAG_KEYS) == {
        "COMMENT",
        "ARTIST",
        "ALBUM",
        "DATE",
        "DESCRIPTION",
        "SYNOPSIS",
        "PURL",
        "PART_NUMBER",
        "TOTAL_PARTS",
    }
    assert ORDERING == ("title", "ARTIST", "ALBUM", "PART_NUMBER", "DESCRIPTION", "COMMENT", "PURL")
    assert Field.from_key("title") is Field.TITLE
    assert Field.from_key("Title") is None


def test_encode_orders_priority_fields_first():
    record = {"DATE": "1971", "ARTIST": "Pink Floyd", "title": "Echoes"}
    text = encode(record, ORDERING)
    headers = [line for line in text.splitlines() if line.startswith("(-------")]
    assert headers[:len(ORDERING)] == [format_header(k) for k in ORDERING]
    assert headers[-1] == format_header("DATE")
    assert text.startswith("(-------title-------)\nEchoes\n(-------ARTIST-------)\nPink Floyd\n")
    # Listed but missing fields are emitted empty
    assert "(-------ALBUM-------)\n\n" in text


def test_decode_drops_unrecognized_header(caplog):
    text = "(-------BOGUS-------)\nx\n(-------ARTIST-------)\nPink Floyd\n"
    with caplog.at_level(logging.WARNING):
        record = decode(text)
    assert record == {"ARTIST": "Pink Floyd"}
    assert "BOGUS" in caplog.text


def test_decode_keeps_multiline_values_and_ignores_preamble():
    text = (
        "/videos/echoes.mkv\n"
        "(-------DESCRIPTION-------)\n"
        "  first paragraph\n"
        "\n"
        "second: (with punctuation)\n"
        "\n"
        "(-------title-------)\n"
        "Echoes\n"
    )
    record = decode(text)
    assert record == {
        "DESCRIPTION": "first paragraph\n\nsecond: (with punctuation)",
        "title": "Echoes",
    }


def test_decode_header_must_fill_the_line():
    record = decode("(-------COMMENT-------)\nsee (-------ARTIST-------) below\n")
    assert record == {"COMMENT": "see (-------ARTIST-------) below"}


def test_decode_empty_input():
    assert decode("") == {}
    assert decode("just some notes\nno headers here\n") == {}


def test_decode_tolerates_crlf():
    assert decode("(-------ALBUM-------)\r\nMeddle\r\n") == {"ALBUM": "Meddle"}


def test_round_trip_all_fields():
    record = {key: f"value for {key}\nline two" for key in ALL_KEYS}
    assert decode(encode(record)) == record


def test_round_trip_after_empty_removal():
    record = {"title": "Echoes", "ARTIST": "Pink Floyd", "COMMENT": ""}
    assert drop_empty(decode(encode(record))) == {"title": "Echoes", "ARTIST": "Pink Floyd"}


def test_ordering_does_not_change_meaning():
    record = {key: key.lower() for key in ALL_KEYS}
    shuffled = list(ALL_KEYS)
    random.Random(7).shuffle(shuffled)
    assert decode(encode(record, shuffled)) == decode(encode(record, ORDERING))


def test_drop_empty_only_removes_empty_values():
    assert drop_empty({"title": "", "ARTIST": "x", "DATE": ""}) == {"ARTIST": "x"}
