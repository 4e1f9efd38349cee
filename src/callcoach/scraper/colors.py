"""Brand colour helpers: CSS parsing, hex normalisation, palette generation."""

from __future__ import annotations

import re

COLOR_VALUE = r"(#[0-9a-fA-F]{3,6}|rgba?\([^)]+\))"

CSS_VAR_PATTERNS = [
    ("primary", re.compile(r"--(?:primary|main|brand)(?:-color)?:\s*" + COLOR_VALUE, re.I)),
    ("secondary", re.compile(r"--(?:secondary)(?:-color)?:\s*" + COLOR_VALUE, re.I)),
    ("accent", re.compile(r"--(?:accent|highlight)(?:-color)?:\s*" + COLOR_VALUE, re.I)),
    ("background", re.compile(r"--(?:bg|background)(?:-color)?:\s*" + COLOR_VALUE, re.I)),
    ("text", re.compile(r"--(?:text|foreground)(?:-color)?:\s*" + COLOR_VALUE, re.I)),
]

HEADER_BG_RE = re.compile(
    r"(?:header|navbar|nav|\.brand)[^{]*\{[^}]*background(?:-color)?:\s*" + COLOR_VALUE, re.I
)
BUTTON_BG_RE = re.compile(
    r"(?:\.btn|button)[^{]*\{[^}]*background(?:-color)?:\s*" + COLOR_VALUE, re.I
)
RGB_RE = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)")

DEFAULT_PALETTE = {
    "primary": "#2563eb",
    "secondary": "#1e40af",
    "accent": "#3b82f6",
    "light": "#dbeafe",
    "dark": "#1e3a8a",
}


def normalize_to_hex(color: str | None) -> str | None:
    """"#abc", "#AABBCC", "rgb(1, 2, 3)" -> lowercase 6-digit hex."""
    if not color:
        return None
    color = color.strip().lower()

    if color.startswith("#"):
        if len(color) == 4:
            return "#" + "".join(c * 2 for c in color[1:])
        return color

    match = RGB_RE.match(color)
    if match:
        r, g, b = (int(v) for v in match.groups())
        return f"#{r:02x}{g:02x}{b:02x}"

    return None


def extract_colors_from_css(css: str) -> dict:
    colors = {"primary": None, "secondary": None, "accent": None, "background": None, "text": None}
    if not css:
        return colors

    for kind, pattern in CSS_VAR_PATTERNS:
        match = pattern.search(css)
        if match:
            colors[kind] = normalize_to_hex(match.group(1))

    # Fall back to header / button backgrounds
    if not colors["primary"]:
        match = HEADER_BG_RE.search(css)
        if match:
            colors["primary"] = normalize_to_hex(match.group(1))

    if not colors["accent"]:
        match = BUTTON_BG_RE.search(css)
        if match:
            colors["accent"] = normalize_to_hex(match.group(1))

    return colors


def hex_to_hsl(hex_color: str) -> tuple[int, int, int]:
    r = int(hex_color[1:3], 16) / 255
    g = int(hex_color[3:5], 16) / 255
    b = int(hex_color[5:7], 16) / 255

    mx, mn = max(r, g, b), min(r, g, b)
    lightness = (mx + mn) / 2

    if mx == mn:
        h = s = 0.0
    else:
        d = mx - mn
        s = d / (2 - mx - mn) if lightness > 0.5 else d / (mx + mn)
        if mx == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif mx == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    return round(h * 360), round(s * 100), round(lightness * 100)


def hsl_to_hex(h: float, s: float, lightness: float) -> str:
    s /= 100
    lightness /= 100

    c = (1 - abs(2 * lightness - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = lightness - c / 2

    if h < 60:
        r, g, b = c, x, 0
    elif h < 120:
        r, g, b = x, c, 0
    elif h < 180:
        r, g, b = 0, c, x
    elif h < 240:
        r, g, b = 0, x, c
    elif h < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return "#" + "".join(f"{round((v + m) * 255):02x}" for v in (r, g, b))


def generate_color_palette(primary_hex: str | None) -> dict:
    """Derive secondary/accent/light/dark shades from a primary colour."""
    if not primary_hex or not primary_hex.startswith("#") or len(primary_hex) != 7:
        return dict(DEFAULT_PALETTE)

    h, s, lightness = hex_to_hsl(primary_hex)
    return {
        "primary": primary_hex,
        "secondary": hsl_to_hex(h, s, max(0, lightness - 15)),
        "accent": hsl_to_hex(h, min(100, s + 10), min(70, lightness + 10)),
        "light": hsl_to_hex(h, max(20, s - 30), min(95, lightness + 40)),
        "dark": hsl_to_hex(h, s, max(10, lightness - 30)),
    }


def is_light_color(hex_color: str | None) -> bool:
    if not hex_color or not hex_color.startswith("#"):
        return True
    r = int(hex_color[1:3], 16)
    g = int(hex_color[3:5], 16)
    b = int(hex_color[5:7], 16)
    # Relative luminance
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255 > 0.5
