from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Position(BaseModel):
    """Placement in percent of frame width (x) and height (y), 0–100."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    def clamped(self) -> "Position":
        return Position(x=clamp_percent(self.x), y=clamp_percent(self.y))


class TextStyle(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    font_family: str           # path to a font file
    font_size: int             # px
    font_color: str            # "#RRGGBB" or a named color
    background_color: str
    background_opacity: float  # 0–1
    padding: int               # box padding around the text, px
    border_width: int          # outline width, px
    border_color: str


DEFAULT_TEXT_STYLE = TextStyle(
    font_family="/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    font_size=32,
    font_color="#FFFFFF",
    background_color="#000000",
    background_opacity=0.5,
    padding=10,
    border_width=2,
    border_color="#000000",
)


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, float(value)))
