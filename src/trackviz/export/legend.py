"""Colour scale image shown next to the colour-graded tracks."""

from __future__ import annotations

import io

from PIL import Image, ImageDraw

from trackviz.render.gradient import color_to_rgb, value2color


class LegendRenderer:
    """Render a horizontal gradient bar as PNG.

    Each pixel column ``x`` is drawn with ``value2color(x, 0, width - 1)``,
    so the left edge is the low end of the ramp.
    """

    def __init__(self, width: int = 300, height: int = 30) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Legend size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    def image(self) -> Image.Image:
        im = Image.new("RGB", (self.width, self.height), (255, 255, 255))
        draw = ImageDraw.Draw(im)
        for x in range(self.width):
            rgb = color_to_rgb(value2color(x, 0, self.width - 1))
            draw.line([(x, 0), (x, self.height - 1)], fill=rgb)
        return im

    def render(self) -> bytes:
        """Return the legend as PNG bytes."""
        buf = io.BytesIO()
        self.image().save(buf, format="PNG")
        return buf.getvalue()
