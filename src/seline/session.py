"""Interactive picking session and the embedding entry points.

Example:
    from seline import pick

    choice = pick(["red", "green", "blue"])
    colors = pick(["red", "green", "blue"], {"multiline": True, "preserve_order": True})

A session is one-shot: it draws the list on the controlling terminal,
handles one key at a time until the user continues or quits, erases what it
drew, and returns the result. Only one session may be active per process.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from dataclasses import asdict
from enum import Enum
from functools import partial
from typing import Any, Callable, ClassVar, Iterable, Mapping

from .config import environment_options, load_config
from .errors import SessionActiveError
from .formatter import LineFormatter
from .keys import Action, Keymap
from .navigation import JumpBuffer, first_stop, move_cursor, move_line
from .options import Options, resolve_options
from .output import Result, format_output
from .renderer import Renderer
from .selection import toggle
from .state import SelectionState
from .styles import StyleTable, style_table
from .terminal import Terminal, TtyTerminal

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    """Lifecycle of a session: LOADING -> READY -> TERMINATED."""

    LOADING = "loading"
    READY = "ready"
    TERMINATED = "terminated"


class Session:
    """One interactive picking session.

    Keyboard controls (defaults, see ``seline.keys``):
        - Up/Left/k, Down/Right/j: Move the cursor
        - 0-9: Jump to a line number
        - Enter/s: Toggle the line (multi mode) or pick it (single mode)
        - S: Toggle a range from the last touched line (multi mode)
        - c: Finish and return the result
        - q/Ctrl+C: Quit without a result
        - u/d: Move the highlighted line up/down

    Args:
        choices: Candidate lines. Any iterable; it is read to completion
            before the terminal is touched.
        options: Resolved options (defaults when None).
        keymap: Key bindings (defaults when None).
        styles: Style table (picked from ``options.no_color`` when None).
        terminal_factory: Callable returning the ``Terminal`` to draw on.
            Defaults to opening ``/dev/tty``.

    Raises:
        SessionActiveError: If another session is active in this process.
    """

    _active: ClassVar["Session | None"] = None
    _guard: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        choices: Iterable[str],
        options: Options | None = None,
        *,
        keymap: Keymap | None = None,
        styles: StyleTable | None = None,
        terminal_factory: Callable[[], Terminal] | None = None,
    ):
        with Session._guard:
            if Session._active is not None:
                raise SessionActiveError()
            Session._active = self
        self._started = False

        self.status = SessionStatus.LOADING
        self.options = options or Options()
        self.keymap = keymap or Keymap()
        self.styles = styles or style_table(self.options.no_color)
        self.state: SelectionState | None = None
        self.result: Result = None
        self._source = choices
        self._terminal_factory = terminal_factory or partial(
            TtyTerminal.open, no_color=self.options.no_color
        )
        self._terminal: Terminal | None = None
        self._renderer: Renderer | None = None
        self._jump = JumpBuffer()

    @classmethod
    def is_active(cls) -> bool:
        """Check if a session currently owns the terminal."""
        return cls._active is not None

    def run(self) -> Result:
        """Run the session to completion and return its result.

        Returns None when the user quits, there is nothing to pick from, or
        the session was cancelled before it started.
        """
        with Session._guard:
            if self._started or self.status is SessionStatus.TERMINATED:
                return None
            self._started = True

        try:
            choices = list(self._source)
            start = first_stop(choices, self.options)
            self.state = SelectionState(
                choices, self.options, highlighted=start, last_touched=start
            )
            if not choices:
                logger.debug("No candidates, nothing to pick")
                return None

            self._terminal = self._terminal_factory()
            self._renderer = Renderer(self._terminal, LineFormatter(self.options, self.styles))
            self._renderer.draw(self.state)
            self.status = SessionStatus.READY
            logger.debug("Session ready with %d candidate(s)", len(choices))

            while self.status is SessionStatus.READY:
                try:
                    key = self._terminal.read_key()
                except KeyboardInterrupt:
                    self._finish(None)
                    break
                self.handle_key(key)

            return self.result
        finally:
            self._teardown()

    def cancel(self) -> bool:
        """Give up a session that has not started running.

        Returns False (and does nothing) once ``run()`` has begun; that run
        releases the session itself.
        """
        with Session._guard:
            if self._started:
                return False
            self._started = True
            self.status = SessionStatus.TERMINATED
            self._release()
        logger.debug("Session cancelled before start")
        return True

    def _release(self) -> None:
        if Session._active is self:
            Session._active = None

    def handle_key(self, key: str) -> None:
        """Dispatch one key and redraw if the state changed."""
        state = self.state
        action = self.keymap.action_for(key)
        logger.debug("Key %r -> %s", key, action)

        if action is None:
            target = self._jump.push(key, len(state.choices))
            if target is not None and move_cursor(state, target - state.highlighted, extend=False):
                self._redraw()
            return

        self._jump.clear()
        changed = False

        if action is Action.QUIT:
            self._finish(None)
        elif action is Action.CONTINUE:
            self._finish(format_output(state))
        elif action is Action.CURSOR_UP:
            changed = move_cursor(state, -1)
        elif action is Action.CURSOR_DOWN:
            changed = move_cursor(state, +1)
        elif action is Action.MOVE_LINE_UP:
            changed = move_line(state, -1)
        elif action is Action.MOVE_LINE_DOWN:
            changed = move_line(state, +1)
        elif action in (Action.SELECT, Action.SELECT_RANGE):
            if self.options.multiline:
                changed = toggle(state, state.highlighted, extend=action is Action.SELECT_RANGE)
            else:
                self._finish(format_output(state))

        if changed:
            self._redraw()

    def _redraw(self) -> None:
        if self._renderer is not None:
            self._renderer.draw(self.state)

    def _finish(self, result: Result) -> None:
        self.result = result
        self.status = SessionStatus.TERMINATED
        logger.debug("Session finished with %r", result)

    def _teardown(self) -> None:
        """Erase the frame, release the terminal and the active-session slot."""
        self.status = SessionStatus.TERMINATED
        terminal, self._terminal = self._terminal, None
        renderer, self._renderer = self._renderer, None
        with Session._guard:
            self._release()

        if terminal is None:
            return
        try:
            if renderer is not None:
                renderer.clear()
        finally:
            try:
                terminal.close()
            except OSError as e:
                logger.warning("Could not release terminal handles, exiting: %s", e)
                sys.exit(1)


def _build_session(
    choices: Iterable[str],
    options: Options | Mapping[str, Any] | None,
    terminal_factory: Callable[[], Terminal] | None,
) -> Session:
    cfg = load_config()
    call_options = asdict(options) if isinstance(options, Options) else options
    resolved = resolve_options(cfg["options"], environment_options(), call_options)
    return Session(
        choices,
        resolved,
        keymap=Keymap.from_config(cfg["keys"]),
        styles=style_table(resolved.no_color, cfg["styles"]),
        terminal_factory=terminal_factory,
    )


def pick(
    choices: Iterable[str],
    options: Options | Mapping[str, Any] | None = None,
    *,
    terminal_factory: Callable[[], Terminal] | None = None,
) -> Result:
    """Let the user pick from choices and return the result.

    Call-time options win over the config file. Lists are returned as
    lists (not newline-joined), single results as the bare value/index,
    and None when the user quits.

    Raises:
        SessionActiveError: If a session is already running.
        ConfigError: On unknown or invalid options.
    """
    return _build_session(choices, options, terminal_factory).run()


async def pick_async(
    choices: Iterable[str],
    options: Options | Mapping[str, Any] | None = None,
    *,
    terminal_factory: Callable[[], Terminal] | None = None,
) -> Result:
    """Awaitable ``pick()``. The session runs in a worker thread.

    Cancelling the awaiting task before the worker picks the session up
    releases it; a session already drawing runs until the user finishes.
    When stdin is not a terminal, key reads briefly point ``sys.stdin`` at
    the tty, so other threads should not read stdin meanwhile.

    Raises:
        SessionActiveError: If a session is already running.
    """
    session = _build_session(choices, options, terminal_factory)
    try:
        return await asyncio.to_thread(session.run)
    except asyncio.CancelledError:
        session.cancel()
        raise
