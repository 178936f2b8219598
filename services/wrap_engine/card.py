"""Render the semester wrap as a shareable PNG report card (1080x1350)."""

import logging
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageDraw, ImageFont

from .models import ResultPayload

logger = logging.getLogger(__name__)

# ── Dimensions & colors ──────────────────────────────────────
W, H = 1080, 1350
MARGIN = 72

BACKGROUND = (26, 22, 37)       # #1a1625
PANEL = (38, 32, 54)
BORDER = (62, 54, 86)
PRIMARY = (168, 85, 247)
FOREGROUND = (245, 243, 255)
MUTED = (161, 155, 184)

HEADLINE = "Your Semester Kickoff Report"
FOOTER = "Generated by Student Kickoff Wrap ✨"


def resolve_font_path(path: Optional[str]) -> Optional[str]:
    """Returns path if it is a loadable TrueType font, else None."""
    if not path:
        return None
    try:
        ImageFont.truetype(path, 12)
    except (OSError, IOError):
        logger.warning(f"Could not load card font '{path}', falling back to the default font")
        return None
    return path


def load_font(path: Optional[str], size: int):
    if path:
        return ImageFont.truetype(path, size)
    return ImageFont.load_default(size=size)


def _printable(text: str, full_unicode: bool) -> str:
    # The bundled default font only covers Latin-1; drop anything else
    if full_unicode:
        return text
    return text.encode("latin-1", "ignore").decode("latin-1").strip()


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _panel(draw, top: int, height: int) -> None:
    draw.rounded_rectangle(
        [MARGIN, top, W - MARGIN, top + height], radius=24, fill=PANEL, outline=BORDER, width=2
    )


def render_card(payload: ResultPayload, font_path: Optional[str] = None) -> Image.Image:
    """Draws the report card. Without a custom font, non-Latin glyphs are omitted."""
    font_path = resolve_font_path(font_path)
    full_unicode = font_path is not None
    img = Image.new("RGB", (W, H), BACKGROUND)
    draw = ImageDraw.Draw(img)

    title_font = load_font(font_path, 56)
    badge_font = load_font(font_path, 72)
    label_font = load_font(font_path, 24)
    big_font = load_font(font_path, 96)
    body_font = load_font(font_path, 36)
    small_font = load_font(font_path, 22)

    text_width = W - 2 * MARGIN - 64
    y = MARGIN

    # Header
    for line in _wrap(draw, _printable(HEADLINE, full_unicode), title_font, W - 2 * MARGIN):
        draw.text((MARGIN, y), line, fill=FOREGROUND, font=title_font)
        y += 68
    badge = _printable(payload.badge, full_unicode)
    if badge:
        draw.text((MARGIN, y + 8), badge, fill=FOREGROUND, font=badge_font)
    y += 120

    # Stress prediction
    _panel(draw, y, 330)
    draw.text((MARGIN + 32, y + 28), "STRESS PREDICTION", fill=MUTED, font=label_font)
    level = f"{payload.stress_level}%"
    draw.text((MARGIN + 32, y + 70), level, fill=PRIMARY, font=big_font)
    level_box = draw.textbbox((MARGIN + 32, y + 70), level, font=big_font)
    draw.text((level_box[2] + 16, level_box[3] - 40), "chance", fill=MUTED, font=body_font)
    msg_y = y + 200
    for line in _wrap(draw, _printable(payload.stress_message, full_unicode), body_font, text_width):
        draw.text((MARGIN + 32, msg_y), line, fill=FOREGROUND, font=body_font)
        msg_y += 46
    y += 360

    # Role
    _panel(draw, y, 170)
    draw.text((MARGIN + 32, y + 28), "YOUR SEMESTER ROLE", fill=MUTED, font=label_font)
    draw.text((MARGIN + 32, y + 76), _printable(payload.role, full_unicode), fill=FOREGROUND, font=body_font)
    y += 200

    # Fortune
    _panel(draw, y, 260)
    draw.text((MARGIN + 32, y + 28), "SEMESTER FORTUNE", fill=MUTED, font=label_font)
    fortune_y = y + 76
    fortune = f'"{_printable(payload.fortune, full_unicode)}"'
    for line in _wrap(draw, fortune, body_font, text_width)[:3]:
        draw.text((MARGIN + 32, fortune_y), line, fill=FOREGROUND, font=body_font)
        fortune_y += 46

    # Footer
    footer = _printable(FOOTER, full_unicode)
    footer_width = draw.textlength(footer, font=small_font)
    draw.text(((W - footer_width) / 2, H - MARGIN), footer, fill=MUTED, font=small_font)

    return img


def save_card(payload: ResultPayload, path: str, font_path: Optional[str] = None) -> Path:
    """Renders the card and writes it as PNG. Returns the written path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_card(payload, font_path=font_path).save(out, format="PNG")
    logger.info(f"Report card written to {out}")
    return out
