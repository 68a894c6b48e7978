"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

import pytest

from chatmate.core.notation import DecodeFailure, parse_move_text
from chatmate.core.state import GameState
from chatmate.core.transition import apply_move

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def play_moves(state: GameState, *texts: str) -> GameState:
    """Decode and apply each move text in turn, failing loudly on rejects."""
    for text in texts:
        move = parse_move_text(state, text)
        assert not isinstance(move, DecodeFailure), str(move)
        nxt = apply_move(state, move)
        assert nxt is not state, f"{text} was rejected"
        state = nxt
    return state


@pytest.fixture
def play() -> Callable[..., GameState]:
    return play_moves


@pytest.fixture
def initial() -> GameState:
    return GameState.initial()
