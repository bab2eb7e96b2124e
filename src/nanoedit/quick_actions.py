"""Preset edit prompts offered next to the prompt box."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class QuickAction:
    """Short label plus the full instruction it expands to."""

    label: str
    prompt: str


class QuickActionPreset(Enum):
    """Enum of quick actions (single source of truth)."""

    RETRO = QuickAction(
        "Add retro filter", "Add a 1990s retro film filter with slight grain"
    )
    CYBERPUNK = QuickAction(
        "Cyberpunk style", "Transform into a cyberpunk neon aesthetic night scene"
    )
    REMOVE_BACKGROUND = QuickAction(
        "Remove background",
        "Remove the entire background and replace it with a clean minimalist "
        "studio gray",
    )
    PENCIL_SKETCH = QuickAction(
        "Pencil sketch",
        "Turn this image into a detailed pencil sketch on textured paper",
    )
    VIBRANT = QuickAction(
        "Vibrant colors",
        "Boost the saturation and vibrancy of all colors, make it pop",
    )


def quick_actions() -> list[dict[str, str]]:
    """Return quick actions formatted for the API."""
    return [
        {"label": entry.value.label, "prompt": entry.value.prompt}
        for entry in QuickActionPreset
    ]
