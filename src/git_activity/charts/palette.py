"""Series colors: evenly spaced hues at fixed saturation and value."""

import colorsys

DEFAULT_PALETTE_SIZE = 16


def generate_palette(n: int, saturation: float = 0.7, value: float = 0.9) -> tuple[str, ...]:
    """Return ``n`` hex colors with hues spread evenly around the wheel."""
    if n <= 0:
        return ()
    colors = []
    for i in range(n):
        r, g, b = colorsys.hsv_to_rgb(i / n, saturation, value)
        colors.append(f"#{int(r * 255):02x}{int(g * 255):02x}{int(b * 255):02x}")
    return tuple(colors)


DEFAULT_PALETTE = generate_palette(DEFAULT_PALETTE_SIZE)


def color_for(index: int, palette: tuple[str, ...] = DEFAULT_PALETTE) -> str:
    return palette[index % len(palette)]
