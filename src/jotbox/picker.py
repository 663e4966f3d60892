"""Digit accumulator for picking a note by ID before acting on it."""

from typing import Optional, Tuple


class TargetPicker:
    """Idle -> Armed(command, id) -> confirm -> Idle."""

    def __init__(self):
        self.pending_command: Optional[str] = None
        self.accumulated_id = 0
        self.typed = ""

    @property
    def armed(self) -> bool:
        return self.pending_command is not None

    def arm(self, command: str) -> None:
        self.pending_command = command
        self.accumulated_id = 0
        self.typed = ""

    def digit(self, d: int) -> None:
        """Append a decimal digit: 4 then 2 gives 42. Ignored while idle."""
        if not self.armed:
            return
        if not 0 <= d <= 9:
            raise ValueError(f"not a decimal digit: {d}")
        self.accumulated_id = self.accumulated_id * 10 + d
        self.typed += str(d)

    def confirm(self) -> Optional[Tuple[str, int]]:
        """Return (command, id) and reset; None if nothing was armed."""
        if not self.armed:
            return None
        picked = (self.pending_command, self.accumulated_id)
        self.reset()
        return picked

    def reset(self) -> None:
        self.pending_command = None
        self.accumulated_id = 0
        self.typed = ""

    def prompt(self) -> str:
        """Status-line text for the armed command, e.g. 'e 12'."""
        if not self.armed:
            return ""
        return f"{self.pending_command} {self.typed}".rstrip()
