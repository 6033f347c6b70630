"""Mouse button and cursor tracking."""

from __future__ import annotations

from enum import IntEnum


class MouseButton(IntEnum):
    RIGHT = 0
    MIDDLE = 1
    LEFT = 2


class MouseState:
    """Tracks pressed buttons and the last two cursor positions."""

    def __init__(self) -> None:
        self._pressed = {button: False for button in MouseButton}
        self._old = (0, 0)
        self._current = (0, 0)

    def button_clicked(self, button: MouseButton) -> None:
        self._pressed[MouseButton(button)] = True

    def button_released(self, button: MouseButton) -> None:
        self._pressed[MouseButton(button)] = False

    def is_button_clicked(self, button: MouseButton) -> bool:
        return self._pressed[MouseButton(button)]

    def moved(self, x: int, y: int) -> None:
        self._old = self._current
        self._current = (int(x), int(y))

    def translation(self) -> tuple[int, int]:
        """Return the cursor offset caused by the last move."""
        return (self._current[0] - self._old[0], self._current[1] - self._old[1])

    def position(self) -> tuple[int, int]:
        return self._current