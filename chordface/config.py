"""Watch face configuration: colors, geometry parameters and validation."""

import dataclasses
from dataclasses import dataclass

MIN_VERTEX_COUNT = 3
MAX_VERTEX_COUNT = 360

WHITE = 0xFFFFFF
DARK_GRAY = 0x555555
RED = 0xFF0000
DARK_RED = 0xAA0000

COLOR_FIELDS = ('background_color', 'line_color', 'hour_color', 'min_color')
INT_FIELDS = ('vertex_count', 'vertex_shift')
FIELDS = COLOR_FIELDS + INT_FIELDS


class InvalidConfig(ValueError):
    """Raised when a configuration would produce undefined geometry."""


@dataclass(frozen=True)
class FaceConfig:
    vertex_count: int = 12
    vertex_shift: int = 3
    background_color: int = WHITE
    line_color: int = DARK_GRAY
    hour_color: int = RED
    min_color: int = DARK_RED

    def validate(self):
        """Raise InvalidConfig unless every chord has positive length."""
        for name in INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfig(f"{name} must be an integer, got {value!r}")
        for name in COLOR_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) \
                    or not 0 <= value <= 0xFFFFFF:
                raise InvalidConfig(f"{name} must be a 24-bit color, got {value!r}")
        if not MIN_VERTEX_COUNT <= self.vertex_count <= MAX_VERTEX_COUNT:
            raise InvalidConfig(
                f"vertex_count must be in [{MIN_VERTEX_COUNT}, {MAX_VERTEX_COUNT}]"
                f" (got {self.vertex_count})")
        if self.vertex_shift % self.vertex_count == 0:
            raise InvalidConfig(
                f"vertex_shift {self.vertex_shift} collapses every chord "
                f"for vertex_count {self.vertex_count}")
        return self

    def to_dict(self):
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build a validated config from a mapping, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in FIELDS}
        return cls(**known).validate()


def parse_color(value):
    """Accept 0xRRGGBB ints, '#rrggbb', 'rrggbb' or '0xrrggbb' strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise InvalidConfig(f"Not a color: {value!r}")
    text = value.strip().lower()
    if text.startswith('#'):
        text = text[1:]
    elif text.startswith('0x'):
        text = text[2:]
    if len(text) != 6:
        raise InvalidConfig(f"Not a 24-bit color: {value!r}")
    try:
        return int(text, 16)
    except ValueError:
        raise InvalidConfig(f"Not a 24-bit color: {value!r}") from None


def format_color(color):
    return f"#{color:06x}"


def color_to_rgb(color):
    """0xRRGGBB -> (r, g, b) floats in [0, 1]."""
    return (((color >> 16) & 0xFF) / 255.0,
            ((color >> 8) & 0xFF) / 255.0,
            (color & 0xFF) / 255.0)


def _parse_int(key, value):
    """Integers, integral floats and decimal strings; nothing is truncated."""
    if isinstance(value, bool):
        raise InvalidConfig(f"{key} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidConfig(f"{key} must be an integer, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfig(f"{key} must be an integer, got {value!r}") from None


def apply_message(config, message):
    """
    Apply a configuration message on top of `config`.

    `message` maps any subset of the FaceConfig field names to new
    values; fields it does not mention keep their current value.
    Unknown keys are rejected. Returns a new validated FaceConfig and
    leaves `config` untouched if the result is invalid.
    """
    unknown = sorted(set(message) - set(FIELDS))
    if unknown:
        raise InvalidConfig(f"Unknown config field(s): {', '.join(unknown)}")

    changes = {}
    for key, value in message.items():
        if key in COLOR_FIELDS:
            changes[key] = parse_color(value)
        else:
            changes[key] = _parse_int(key, value)

    updated = dataclasses.replace(config, **changes)
    return updated.validate()
