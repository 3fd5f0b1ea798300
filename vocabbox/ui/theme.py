"""Design tokens shared by the screens."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Palette:
    """Colour set for one theme mode."""
    primary200: str
    primary900: str
    grey600: str
    font_main: str
    font_inverse: str
    surface: str
    danger: str
    success: str


PALETTES: Dict[str, Palette] = {
    "light": Palette(
        primary200="#B39DDB",
        primary900="#311B92",
        grey600="#757575",
        font_main="#212121",
        font_inverse="#FFFFFF",
        surface="#FAFAFA",
        danger="#C62828",
        success="#2E7D32",
    ),
    "dark": Palette(
        primary200="#7C4DFF",
        primary900="#B388FF",
        grey600="#9E9E9E",
        font_main="#FFFFFF",
        font_inverse="#121212",
        surface="#1A1A1B",
        danger="#E57373",
        success="#81C784",
    ),
}


def get_palette(mode: str) -> Palette:
    return PALETTES.get(str(mode).lower(), PALETTES["light"])


class DesignTokens:
    """Spacing and sizes."""
    SPACING_XS = 4
    SPACING_SM = 8
    SPACING_MD = 12
    SPACING_LG = 20

    RADIUS_SM = 4
    RADIUS_MD = 8

    PREVIEW_SIZE = 200
    INPUT_HEIGHT = 40
    BUTTON_HEIGHT = 40

    FONT_LABEL = 12
    FONT_MEANING = 16
    FONT_INPUT = 18
    FONT_PHONETICS = 20
    FONT_BUTTON = 24
    FONT_WORD = 32
