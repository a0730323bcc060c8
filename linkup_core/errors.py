from __future__ import annotations


class LinkupError(Exception):
    """Base class for errors raised by the link-up engine."""


class InvalidInputError(LinkupError, ValueError):
    """A caller handed the engine malformed input (bad dimensions, map, alphabet or position)."""


class UnpairableLayoutError(InvalidInputError):
    """An occupancy map has an odd number of active cells and dropping one was not allowed."""

    def __init__(self, active: int) -> None:
        super().__init__(f"Map has {active} active cells; an even count is required to pair every tile")
        self.active = active
