from dataclasses import dataclass

from feedascii.charsets import PALETTES

CATEGORIES = ("hot", "new", "top")
PERIODS = ("hour", "day", "week", "month", "year", "all")
DEFAULT_CATEGORY = "hot"
DEFAULT_PERIOD = "day"


@dataclass(frozen=True)
class RenderConfig:
    simple: bool = False
    invert: bool = False

    @property
    def palette(self) -> str:
        return PALETTES[(self.simple, self.invert)]


@dataclass(frozen=True)
class Listing:
    category: str = DEFAULT_CATEGORY
    period: str | None = None

    @classmethod
    def resolve(cls, category: str | None, period: str | None = None) -> "Listing":
        """Build a listing from loosely validated input.

        Unknown categories fall back to ``hot``. A period only applies to
        ``top`` and falls back to ``day`` when missing or unknown.
        """
        if category not in CATEGORIES:
            return cls(DEFAULT_CATEGORY)
        if category != "top":
            return cls(category)
        return cls("top", period if period in PERIODS else DEFAULT_PERIOD)

    def url(self, name: str, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/r/{name}/{self.category}/.json"

    @property
    def params(self) -> dict[str, str]:
        if self.category == "top" and self.period:
            return {"t": self.period}
        return {}


@dataclass(frozen=True)
class Post:
    title: str
    url: str
    is_video: bool = False
    thumbnail: str | None = None

    @property
    def image_source(self) -> str | None:
        """Address of the still image to render; videos always use their thumbnail."""
        if self.is_video:
            return self.thumbnail
        return self.url
