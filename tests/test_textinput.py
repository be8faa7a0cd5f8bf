import pytest

from graphplot.textinput import ExpressionInput, Key, char_for_key


@pytest.mark.parametrize(
    "key, expected",
    [
        (Key.ONE, "!"),
        (Key.NINE, "("),
        (Key.ZERO, ")"),
        (Key.EQUAL, "+"),
        (Key.SIX, "^"),
        (Key.SLASH, "?"),
        (Key.A, "A"),
    ],
)
def test_shifted_characters(key, expected):
    assert char_for_key(key, True) == expected


def test_unshifted_characters():
    assert char_for_key(Key.MINUS, False) == "-"
    assert char_for_key(Key.EQUAL, False) == "="
    assert char_for_key(Key.X, False) == "X"
    assert char_for_key(Key.PERIOD, False) == "."


def test_shifted_unmapped_key_gives_nothing():
    assert char_for_key(Key.C, True) is None


def test_non_printable_keys_give_nothing():
    assert char_for_key(Key.ENTER) is None
    assert char_for_key(Key.BACKSPACE) is None
    assert char_for_key(Key.LEFT_SHIFT) is None


def test_typing_an_expression():
    entry = ExpressionInput()
    presses = [
        (Key.S, False),
        (Key.I, False),
        (Key.N, False),
        (Key.NINE, True),
        (Key.X, False),
        (Key.ZERO, True),
    ]
    for key, shift in presses:
        assert entry.press(key, shift) is False
    assert entry.text == "SIN(X)"


def test_backspace_removes_last_character():
    entry = ExpressionInput()
    entry.press(Key.ONE)
    entry.press(Key.TWO)
    entry.press(Key.BACKSPACE)
    assert entry.text == "1"


def test_backspace_on_empty_input_is_harmless():
    entry = ExpressionInput()
    entry.press(Key.BACKSPACE)
    assert entry.text == ""


def test_input_is_limited_to_max_length():
    entry = ExpressionInput(100)
    for _ in range(105):
        entry.press(Key.A)
    assert len(entry.text) == 100


def test_enter_completes_input_and_ignores_later_keys():
    entry = ExpressionInput()
    entry.press(Key.X)
    assert entry.press(Key.ENTER) is True
    assert entry.done
    entry.press(Key.Y)
    assert entry.text == "X"


def test_unmapped_shifted_key_adds_nothing():
    entry = ExpressionInput()
    entry.press(Key.Q, True)
    entry.press(Key.UP)
    assert entry.text == ""