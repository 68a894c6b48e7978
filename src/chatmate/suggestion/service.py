"""Run a move suggester under pacing limits and decode its reply."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent import futures

from chatmate.core.move import Move
from chatmate.core.notation.move_text import DecodeFailure, parse_move_text
from chatmate.core.state import GameState
from chatmate.suggestion.interfaces import MoveSuggester, SuggestionLimits

_LOGGER = logging.getLogger(__name__)

# How often a pending reply checks for cancellation.
_POLL_INTERVAL_S = 0.05


def request_suggested_move(
    state: GameState,
    suggester: MoveSuggester,
    limits: SuggestionLimits | None = None,
    *,
    is_cancelled: Callable[[], bool] | None = None,
) -> Move | DecodeFailure:
    """Ask *suggester* for a move in *state* and decode the reply.

    The call runs on a worker thread. A reply that does not arrive within
    ``limits.timeout_s`` becomes a :class:`DecodeFailure`; a fast reply is
    held until ``limits.min_latency_s`` has elapsed. When *is_cancelled*
    turns true the wait ends at once and a :class:`DecodeFailure` is
    returned without pacing. Exceptions raised by the suggester propagate
    to the caller.
    """
    limits = limits or SuggestionLimits()
    started = time.perf_counter()

    pool = futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="suggester")
    try:
        future = pool.submit(suggester.suggest, state)
        try:
            text = _await_reply(future, limits.timeout_s, is_cancelled)
        except futures.TimeoutError:
            _LOGGER.warning("No suggestion within %.1fs", limits.timeout_s)
            text = None
    finally:
        # A stuck provider call must not block the caller past the timeout.
        pool.shutdown(wait=False, cancel_futures=True)

    if is_cancelled is not None and is_cancelled():
        _LOGGER.debug("Suggestion request cancelled")
        return DecodeFailure(text or "", "request cancelled")

    remaining = limits.min_latency_s - (time.perf_counter() - started)
    if remaining > 0:
        time.sleep(remaining)

    if text is None:
        return DecodeFailure("", f"no reply within {limits.timeout_s:g}s")
    outcome = parse_move_text(state, text)
    if isinstance(outcome, DecodeFailure):
        _LOGGER.info("Suggestion rejected: %s", outcome)
    else:
        _LOGGER.info("Suggested move %s (from %r)", outcome, text)
    return outcome


def _await_reply(
    future: futures.Future[str],
    timeout_s: float | None,
    is_cancelled: Callable[[], bool] | None,
) -> str | None:
    """Reply text, or ``None`` once *is_cancelled* reports true.

    Raises ``futures.TimeoutError`` when *timeout_s* elapses first.
    """
    if is_cancelled is None:
        return future.result(timeout=timeout_s)

    deadline = None if timeout_s is None else time.perf_counter() + timeout_s
    while not is_cancelled():
        wait = _POLL_INTERVAL_S
        if deadline is not None:
            wait = min(wait, deadline - time.perf_counter())
            if wait <= 0:
                raise futures.TimeoutError
        done, _ = futures.wait([future], timeout=wait)
        if done:
            return future.result()
    return None
