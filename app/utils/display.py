"""
Display helpers shared by the song, ranking and blog responses.
"""
import re

RATING_RED = "#FF0000"     # unfavorable, 0-49
RATING_YELLOW = "#FFCC33"  # mixed, 50-69
RATING_GREEN = "#66CC33"   # favorable, 70-100


def rating_color(rating: int | float) -> str:
    """
    Background colour for a rating.

    The rating is clamped to 0-100 first; this is the only place ratings
    are clamped, stored values are left as entered.
    """
    clamped = max(0, min(100, rating))
    if clamped < 50:
        return RATING_RED
    if clamped < 70:
        return RATING_YELLOW
    return RATING_GREEN


def slugify(title: str) -> str:
    """
    URL slug for a blog post title.

    "When To Listen: Rainy Days!" -> "when-to-listen-rainy-days"
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
