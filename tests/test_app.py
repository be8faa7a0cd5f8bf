import pygame
import pytest

from graphplot.app import main, prompt_expression
from graphplot.expression import create_parser


@pytest.fixture
def display(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    pygame.init()
    screen = pygame.display.set_mode((600, 600))
    pygame.event.clear()
    yield screen, pygame.time.Clock(), pygame.font.Font(None, 20)
    pygame.quit()


def _key(key, shift=False):
    mod = pygame.KMOD_LSHIFT if shift else pygame.KMOD_NONE
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod))


def test_typed_expression_is_upper_case_with_shifted_symbols(display):
    for key in (pygame.K_s, pygame.K_i, pygame.K_n):
        _key(key)
    _key(pygame.K_9, shift=True)
    _key(pygame.K_x)
    _key(pygame.K_0, shift=True)
    _key(pygame.K_RETURN)
    text = prompt_expression(*display)
    assert text == "SIN(X)"
    parser = create_parser()
    parser.set_expression(text)
    assert parser.evaluate({"X": 0.0}) == 0.0


def test_backspace_removes_last_character(display):
    _key(pygame.K_x)
    _key(pygame.K_BACKSPACE)
    _key(pygame.K_2)
    _key(pygame.K_RETURN)
    assert prompt_expression(*display) == "2"


def test_shift_only_maps_known_letters(display):
    _key(pygame.K_c, shift=True)
    _key(pygame.K_a, shift=True)
    _key(pygame.K_KP_ENTER)
    assert prompt_expression(*display) == "A"


def test_input_is_capped_at_maximum_length(display):
    for _ in range(105):
        _key(pygame.K_x)
    _key(pygame.K_RETURN)
    assert prompt_expression(*display) == "X" * 100


def test_enter_on_empty_input_returns_empty_string(display):
    _key(pygame.K_RETURN)
    assert prompt_expression(*display) == ""


def test_closing_window_returns_none(display):
    _key(pygame.K_x)
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert prompt_expression(*display) is None


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0


def test_main_returns_zero_when_closed_during_prompt(display):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert main([]) == 0