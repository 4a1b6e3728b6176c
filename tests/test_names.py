import random
import string

from worldbest.services import display_name, issue_token, normalize_name, suggest_name

from conftest import SECRET, T0


def test_normalize_name_keeps_three_letters():
    assert normalize_name("hello123!!") == "HEL"
    assert normalize_name("ace") == "ACE"
    assert normalize_name("a-b") == "AB"
    assert normalize_name(" x1y2z3w ") == "XYZ"


def test_normalize_name_without_letters_is_empty():
    assert normalize_name("") == ""
    assert normalize_name("123") == ""
    assert normalize_name(None) == ""


def test_suggest_name_repeats_one_letter():
    rng = random.Random(42)
    for _ in range(50):
        name = suggest_name(rng)
        assert len(name) == 3
        assert name[0] in string.ascii_uppercase
        assert name == name[0] * 3


def test_display_name_never_empty():
    for raw in ("", "123", None, "!!!"):
        name = display_name(raw, random.Random(1))
        assert len(name) == 3 and len(set(name)) == 1
    assert display_name("hello123!!") == "HEL"


def test_issue_token_is_deterministic_per_instant():
    token = issue_token(T0, SECRET)
    assert token == issue_token(T0, SECRET)
    assert len(token) == 32
    assert token != issue_token(T0.replace(second=1), SECRET)
    assert token != issue_token(T0, "another-secret")
