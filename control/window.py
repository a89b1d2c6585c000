from __future__ import annotations
from dataclasses import dataclass

class ReentrantDrainError(RuntimeError):
    """Raised when a sequence is touched while a drain is still running."""

@dataclass
class DrainWindow:
    active: bool = False

    def open(self):
        if self.active:
            raise ReentrantDrainError("drain already in progress on this sequence")
        self.active = True
    def close(self):
        self.active = False
    def can_mutate(self) -> bool:
        return not self.active
    def require_idle(self, op: str):
        if self.active:
            raise ReentrantDrainError(f"cannot {op} while a drain is in progress")
