"""Interactive window: type an expression, then pan, zoom and inspect its graph."""

from __future__ import annotations

import argparse
from typing import Optional

import pygame

from .expression import create_parser
from .plot import (
    HEIGHT,
    ORIGIN_X,
    WIDTH,
    ViewState,
    axis_labels,
    compute_graph_points,
    crosshair_pixels,
)
from .textinput import ExpressionInput, Key

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
DARKGRAY = (80, 80, 80)
MAROON = (190, 33, 55)
RED = (230, 41, 55)
FPS = 60
NUM_LABELS = 10

_SPECIAL_KEYS = {
    pygame.K_RETURN: Key.ENTER,
    pygame.K_KP_ENTER: Key.ENTER,
    pygame.K_BACKSPACE: Key.BACKSPACE,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LSHIFT: Key.LEFT_SHIFT,
    pygame.K_RSHIFT: Key.RIGHT_SHIFT,
}

_HELD_KEYS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_z: Key.Z,
    pygame.K_x: Key.X,
}


def _translate_key(key: int) -> Optional[int]:
    """Map a pygame key to a Key code; letter keys map to their upper-case code."""
    if pygame.K_a <= key <= pygame.K_z:
        return key - (pygame.K_a - Key.A)
    if 32 <= key <= 126:
        return key
    return _SPECIAL_KEYS.get(key)


def prompt_expression(screen, clock, font) -> Optional[str]:
    """Let the user type an expression; return it on Enter, or None if the window closes."""
    entry = ExpressionInput()
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return None
            if event.type != pygame.KEYDOWN:
                continue
            key = _translate_key(event.key)
            if key is None:
                continue
            shift = bool(getattr(event, "mod", 0) & pygame.KMOD_SHIFT)
            if entry.press(key, shift):
                return entry.text
        screen.fill(BLACK)
        screen.blit(font.render("Math here:", True, DARKGRAY), (20, 20))
        screen.blit(font.render(entry.text, True, MAROON), (20, 60))
        pygame.display.flip()
        clock.tick(FPS)


def _draw(screen, font, state: ViewState, points) -> None:
    screen.fill(BLACK)
    axis_x = ORIGIN_X - state.phase
    pygame.draw.line(screen, WHITE, (0, state.y_position), (WIDTH, state.y_position))
    pygame.draw.line(screen, WHITE, (axis_x, 0), (axis_x, HEIGHT))

    x_labels, y_labels = axis_labels(state.y_position, NUM_LABELS, state.amplitude, state.phase)
    for text, x, y in x_labels + y_labels:
        screen.blit(font.render(text, True, WHITE), (x, y))

    if len(points) >= 2:
        pygame.draw.lines(screen, WHITE, False, points)

    if state.point is not None:
        pygame.draw.circle(screen, RED, state.point, 2)
        for pixel in crosshair_pixels(state.point, state.y_position, state.phase):
            if 0 <= pixel[0] < WIDTH and 0 <= pixel[1] < HEIGHT:
                screen.set_at(pixel, RED)
    pygame.display.flip()


def main(argv=None) -> int:
    """Open the graph window and run until it is closed."""
    argparse.ArgumentParser(
        prog="graphplot",
        description="Plot a function of X. Arrows pan, Z/X zoom, Space sets the "
        "crosshair at the mouse, R enters a new expression.",
    ).parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Graph with Crosshair")
        clock = pygame.time.Clock()
        input_font = pygame.font.Font(None, 24)
        label_font = pygame.font.Font(None, 14)

        parser = create_parser()
        expression = prompt_expression(screen, clock, input_font)
        if expression is None:
            return 0
        parser.set_expression(expression)

        state = ViewState()
        points = compute_graph_points(parser, state.phase, state.amplitude, state.y_position)

        while True:
            pressed: set[int] = set()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.KEYDOWN:
                    key = _translate_key(event.key)
                    if key is not None:
                        pressed.add(key)

            keys_down = pygame.key.get_pressed()
            held = {code for pg_key, code in _HELD_KEYS.items() if keys_down[pg_key]}
            if state.apply_keys(held, pressed, pygame.mouse.get_pos()):
                points = compute_graph_points(
                    parser, state.phase, state.amplitude, state.y_position
                )

            if Key.R in pressed:
                expression = prompt_expression(screen, clock, input_font)
                if expression is None:
                    return 0
                parser.set_expression(expression)
                points = compute_graph_points(
                    parser, state.phase, state.amplitude, state.y_position
                )
                print(f"Graph reset with expression: {expression}")

            _draw(screen, label_font, state, points)
            clock.tick(FPS)
    finally:
        pygame.quit()