import json

import pytest


@pytest.fixture()
def pairs_json():
    """
    Token/value pairs as produced by a byte-level BPE tokenizer.

    Decoded text:
      "\\nYou are a helpful assistant.\\nCommand:\\nGo press that switch"
    Range: min 0.9 ("Ġare"), max 19.6 ("Go")
    """
    return json.dumps([
        ["Ċ", 9.5],
        ["You", 1.0],
        ["Ġare", 0.9],
        ["Ġa", 4.0],
        ["Ġhelpful", 2.5],
        ["Ġassistant", 1.8],
        [".Ċ", 1.4],
        ["Command", 11.1],
        [":Ċ", 7.3],
        ["Go", 19.6],
        ["Ġpress", 16.6],
        ["Ġthat", 8.4],
        ["Ġswitch", 12.0],
    ])


@pytest.fixture()
def two_pairs_json():
    """Go (19.6) and Ġpress (16.6)."""
    return '[["Go", 19.6], ["\\u0120press", 16.6]]'


@pytest.fixture()
def fox_text():
    """
    Text: "The quick  fox,\\njumps zzz"
    Units: The, " ", quick, "  ", "fox,", "\\n", jumps, " ", zzz
    """
    return "The quick  fox,\njumps zzz"


@pytest.fixture()
def fox_dictionary_json():
    """
    Values for The (0.1), quick (0.5), fox (0.95), jumps (0.3).
    The "\\u0085" key is a control-only artifact and must be ignored.
    """
    return json.dumps({"The": 0.1, "quick": 0.5, "fox": 0.95, "jumps": 0.3, "\u0085": 99.0})
