# Concierge CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color palette and rich theme used by the Concierge console.

`OneColors` exposes the palette as plain style strings so they can be used
directly inside rich markup (`f"[{OneColors.DARK_RED}]..."`). Suffixes follow
a small convention: `_b` is bold, `_i` is italic.
"""
from rich.style import Style
from rich.theme import Theme


class ColorsMeta(type):
    """Allows `OneColors.RED_b` style lookups for bold/italic variants."""

    def __getattr__(cls, name: str) -> str:
        base, _, modifier = name.rpartition("_")
        if base and modifier in {"b", "i"} and base in cls.__dict__:
            suffix = "bold" if modifier == "b" else "italic"
            return f"{cls.__dict__[base]} {suffix}"
        raise AttributeError(f"'{cls.__name__}' has no color named '{name}'")


class OneColors(metaclass=ColorsMeta):
    BLACK = "#282C34"
    WHITE = "#ABB2BF"
    GREY = "#5C6370"
    COMMENT_GREY = "#7F848E"
    RED = "#E06C75"
    DARK_RED = "#BE5046"
    GREEN = "#98C379"
    YELLOW = "#E5C07B"
    DARK_YELLOW = "#D19A66"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"
    CYAN = "#56B6C2"


def get_theme() -> Theme:
    """Return the rich theme shared by every Concierge console."""
    return Theme(
        {
            "usage": Style.parse(OneColors.BLUE_b),
            "error": Style.parse(OneColors.RED_b),
            "command": Style.parse("bold"),
            "hint": Style.parse(OneColors.COMMENT_GREY),
        }
    )
