"""
Category Color Assignment.

Generates a badge color for a new category whose hue sits far from the
hues a user's categories already use. Colors are "#rrggbb" strings.

Usage:
    from cloudnotes.backend.core.colors import ColorAssigner

    assigner = ColorAssigner()
    color = assigner.assign(["#ff0000", "#00ff00"])

The assigner has no state besides its random source, so one instance
can serve concurrent requests.
"""

import random
import re
from collections.abc import Iterable
from typing import NamedTuple

from cloudnotes.backend.core.logging import get_logger

logger = get_logger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

DEFAULT_MIN_SEPARATION = 30.0
DEFAULT_SEPARATION_FLOOR = 5.0
DEFAULT_ATTEMPTS_PER_ROUND = 20
DEFAULT_RELAXATION_ROUNDS = 6
DEFAULT_SATURATION_RANGE = (70.0, 90.0)
DEFAULT_LIGHTNESS_RANGE = (45.0, 55.0)


class HueChoice(NamedTuple):
    """A sampled hue and the separation it was accepted at (0 when none held)."""

    hue: float
    separation: float


# =============================================================================
# Color space conversions
# =============================================================================


def is_hex_color(value: object) -> bool:
    """Return True for a "#rrggbb" string (either case)."""
    return isinstance(value, str) and HEX_COLOR_PATTERN.match(value) is not None


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """
    Parse "#rrggbb" into 0-255 channels.

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    if not is_hex_color(color):
        raise ValueError(f"Not a hex color: {color!r}")
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format 0-255 channels as lower-case "#rrggbb"."""
    channels = (max(0, min(255, int(c))) for c in (r, g, b))
    return "#" + "".join(f"{c:02x}" for c in channels)


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """
    Convert 0-255 channels to (hue 0-360, saturation 0-100, lightness 0-100).

    Achromatic colors (greys) report hue 0.
    """
    rf, gf, bf = r / 255, g / 255, b / 255
    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    delta = high - low
    lightness = (high + low) / 2

    if delta == 0:
        return 0.0, 0.0, lightness * 100

    saturation = delta / (1 - abs(2 * lightness - 1))

    if high == rf:
        hue = 60 * (((gf - bf) / delta) % 6)
    elif high == gf:
        hue = 60 * ((bf - rf) / delta + 2)
    else:
        hue = 60 * ((rf - gf) / delta + 4)

    return hue % 360, saturation * 100, lightness * 100


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """Convert (hue 0-360, saturation 0-100, lightness 0-100) to 0-255 channels."""
    s /= 100
    l /= 100
    a = s * min(l, 1 - l)

    def channel(n: int) -> int:
        k = (n + h / 30) % 12
        value = l - a * max(min(k - 3, 9 - k, 1), -1)
        return round(255 * value)

    return channel(0), channel(8), channel(4)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert (hue, saturation, lightness) straight to lower-case "#rrggbb"."""
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_hsl(color: str) -> tuple[float, float, float]:
    """Parse "#rrggbb" into (hue, saturation, lightness). Raises ValueError when malformed."""
    return rgb_to_hsl(*hex_to_rgb(color))


def hex_to_hue(color: str) -> float:
    """Hue of a hex color in degrees. Raises ValueError when malformed."""
    return hex_to_hsl(color)[0]


def hue_distance(a: float, b: float) -> float:
    """Shortest angular distance between two hues, in [0, 180]."""
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


# =============================================================================
# Assigner
# =============================================================================


class ColorAssigner:
    """
    Picks distinct hues for new categories.

    A candidate hue is sampled uniformly and accepted when it is at least
    the current separation away from every existing hue. Each round makes
    ``attempts_per_round`` tries; the separation then drops linearly from
    ``min_separation`` to ``separation_floor`` over ``relaxation_rounds``
    rounds. When even the floor cannot be met, the sampled candidate with
    the largest distance to its nearest neighbour wins, so a color is
    always returned.
    """

    def __init__(
        self,
        min_separation: float = DEFAULT_MIN_SEPARATION,
        separation_floor: float = DEFAULT_SEPARATION_FLOOR,
        attempts_per_round: int = DEFAULT_ATTEMPTS_PER_ROUND,
        relaxation_rounds: int = DEFAULT_RELAXATION_ROUNDS,
        saturation_range: tuple[float, float] = DEFAULT_SATURATION_RANGE,
        lightness_range: tuple[float, float] = DEFAULT_LIGHTNESS_RANGE,
        rng: random.Random | None = None,
    ) -> None:
        if separation_floor > min_separation:
            raise ValueError("separation_floor must not exceed min_separation")
        if attempts_per_round < 1 or relaxation_rounds < 1:
            raise ValueError("attempts_per_round and relaxation_rounds must be positive")

        self.min_separation = float(min_separation)
        self.separation_floor = float(separation_floor)
        self.attempts_per_round = attempts_per_round
        self.relaxation_rounds = relaxation_rounds
        self.saturation_range = saturation_range
        self.lightness_range = lightness_range
        self._rng = rng or random.Random()

    def separation_schedule(self) -> list[float]:
        """Thresholds tried in order, from min_separation down to the floor."""
        if self.relaxation_rounds == 1:
            return [self.min_separation]
        step = (self.min_separation - self.separation_floor) / (self.relaxation_rounds - 1)
        return [self.min_separation - step * i for i in range(self.relaxation_rounds)]

    @staticmethod
    def existing_hues(colors: Iterable[object]) -> list[float]:
        """Hues of the well-formed colors; anything else is skipped."""
        hues = []
        for color in colors:
            if not is_hex_color(color):
                logger.debug("Skipping malformed category color", extra={"color": repr(color)})
                continue
            hues.append(hex_to_hue(color))
        return hues

    def pick_hue(self, hues: list[float]) -> HueChoice:
        """Sample a hue honouring the relaxation schedule."""
        if not hues:
            return HueChoice(self._rng.uniform(0, 360) % 360, self.min_separation)

        best_hue = 0.0
        best_distance = -1.0

        for separation in self.separation_schedule():
            for _ in range(self.attempts_per_round):
                candidate = self._rng.uniform(0, 360) % 360
                nearest = min(hue_distance(candidate, h) for h in hues)
                if nearest >= separation:
                    if separation < self.min_separation:
                        logger.debug(
                            "Hue accepted after relaxing separation",
                            extra={"separation": separation, "existing": len(hues)},
                        )
                    return HueChoice(candidate, separation)
                if nearest > best_distance:
                    best_hue, best_distance = candidate, nearest

        logger.info(
            "No hue met the separation floor, using best candidate",
            extra={"distance": best_distance, "existing": len(hues)},
        )
        return HueChoice(best_hue, 0.0)

    def assign(self, colors: Iterable[object]) -> str:
        """Return a new "#rrggbb" color distinct from ``colors``."""
        choice = self.pick_hue(self.existing_hues(colors))
        saturation = self._rng.uniform(*self.saturation_range)
        lightness = self._rng.uniform(*self.lightness_range)
        return hsl_to_hex(choice.hue, saturation, lightness)
