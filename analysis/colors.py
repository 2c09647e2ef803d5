"""Random chart colors.

Colors are cosmetic only; nothing depends on them being reproducible.
"""

from __future__ import annotations

import random
from typing import Final

from .dto import ChartColor

CHANNEL_MIN: Final[int] = 56
CHANNEL_MAX: Final[int] = 255
FILL_ALPHA: Final[str] = "0.5"
BORDER_ALPHA: Final[str] = "1"


def generate_color(rng: random.Random | None = None) -> ChartColor:
    """Return a translucent fill and an opaque border of the same hue.

    Args:
        rng: Optional random source; defaults to the module-level generator.

    Returns:
        ChartColor with each channel sampled uniformly from `[56, 256)`.
    """

    source = rng or random
    red, green, blue = (source.randint(CHANNEL_MIN, CHANNEL_MAX) for _ in range(3))
    return ChartColor(
        fill=f"rgba({red}, {green}, {blue}, {FILL_ALPHA})",
        border=f"rgba({red}, {green}, {blue}, {BORDER_ALPHA})",
    )
