"""Render state value objects."""

from dataclasses import dataclass


@dataclass(slots=True)
class RenderState:
    """Text currently shown by the display plus whether more is on its way."""

    text: str = ""
    is_rendering: bool = False

    def snapshot(self) -> "RenderState":
        return RenderState(text=self.text, is_rendering=self.is_rendering)


__all__ = ["RenderState"]
