from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from textburn.core.errors import InvalidOperation
from textburn.schemas.operations import Operation, TextOverlayOperation
from textburn.schemas.style import clamp_percent


@dataclass(frozen=True)
class FilterStage:
    """One self-contained drawtext instruction for a single overlay."""

    overlay_id: str
    name: str
    options: Tuple[Tuple[str, str], ...]
    start: float
    end: float

    def render(self) -> str:
        return f"{self.name}=" + ":".join(f"{k}={v}" for k, v in self.options)

    def option(self, key: str) -> Optional[str]:
        for k, v in self.options:
            if k == key:
                return v
        return None

    def is_active(self, t: float) -> bool:
        return self.start <= t < self.end


def format_number(value: float) -> str:
    """Stable decimal text: 2.0 -> '2', 0.125 -> '0.125'."""
    text = f"{float(value):.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


# A value inside -filter_complex is unescaped twice: once by the graph
# parser (delimiters "[],;") and once by the filter's option parser
# (delimiters ":="). Both treat "\" as escape and "'" as quote.
OPTION_SPECIAL = "\\':"
GRAPH_SPECIAL = "\\'[],;"


def _backslash_escape(value: str, special: str) -> str:
    return "".join("\\" + c if c in special else c for c in value)


def escape_value(value: str) -> str:
    """Escape a plain option value for use inside a filter graph."""
    return _backslash_escape(_backslash_escape(value, OPTION_SPECIAL), GRAPH_SPECIAL)


def escape_text(value: str) -> str:
    """drawtext text: its own %{...} expansion first, then both parser levels."""
    return escape_value(_backslash_escape(value, "\\%"))


def escape_filter_path(path: str) -> str:
    return escape_value(path.replace("\\", "/"))


def to_ffmpeg_color(color: str) -> str:
    """
    '#RRGGBB' -> '0xRRGGBB'. Anything else (named colors, malformed
    strings) is passed through for ffmpeg to interpret.
    """
    color = (color or "").strip()
    if color.startswith("#"):
        return "0x" + escape_value(color[1:])
    return escape_value(color)


def normalize_position(x: float, y: float) -> Tuple[float, float]:
    """Clamp percentages into [0, 100] and scale to [0, 1]."""
    return clamp_percent(x) / 100.0, clamp_percent(y) / 100.0


def time_window(
    op: TextOverlayOperation,
    media_duration: Optional[float] = None,
) -> Tuple[float, float]:
    """
    Active window [start, end) of an overlay. With a known media duration
    both bounds are clamped into [0, media_duration].
    """
    start = max(0.0, float(op.start))
    end = max(start, start + float(op.duration))
    if media_duration is not None and media_duration >= 0:
        start = min(start, media_duration)
        end = min(end, media_duration)
    return start, end


def placement(
    op: TextOverlayOperation,
    frame_width: float,
    frame_height: float,
    text_width: float,
    text_height: float,
) -> Tuple[float, float]:
    """
    Pixel position of the text box the way ffmpeg evaluates the x/y
    expressions emitted by compile_filters.
    """
    x_norm, y_norm = normalize_position(op.position.x, op.position.y)
    padding = max(0, op.style.padding)
    x = padding + x_norm * (frame_width - text_width - 2 * padding)
    y = padding + y_norm * (frame_height - text_height - 2 * padding)
    return x, y


def _drawtext_stage(
    op: TextOverlayOperation,
    media_duration: Optional[float],
) -> FilterStage:
    style = op.style
    x_norm, y_norm = normalize_position(op.position.x, op.position.y)
    padding = max(0, style.padding)
    opacity = max(0.0, min(1.0, float(style.background_opacity)))
    start, end = time_window(op, media_duration)

    options = (
        ("fontfile", escape_filter_path(style.font_family)),
        ("text", escape_text(op.text)),
        ("x", f"{padding}+{format_number(x_norm)}*(w-tw-{padding}*2)"),
        ("y", f"{padding}+{format_number(y_norm)}*(h-th-{padding}*2)"),
        ("fontsize", str(style.font_size)),
        ("fontcolor", to_ffmpeg_color(style.font_color)),
        ("borderw", str(max(0, style.border_width))),
        ("bordercolor", to_ffmpeg_color(style.border_color)),
        ("box", "1"),
        ("boxcolor", f"{to_ffmpeg_color(style.background_color)}@{format_number(opacity)}"),
        ("boxborderw", str(padding)),
        ("enable", f"'gte(t,{format_number(start)})*lt(t,{format_number(end)})'"),
    )
    return FilterStage(
        overlay_id=op.id,
        name="drawtext",
        options=options,
        start=start,
        end=end,
    )


def compile_filters(
    operations: Sequence[Operation],
    media_duration: Optional[float] = None,
) -> List[FilterStage]:
    """
    Map overlays to filter stages, one per overlay, in input order.

    Pure: the same operations always compile to identical stages. Values
    out of range are clamped rather than rejected.
    """
    stages: List[FilterStage] = []
    for op in operations:
        if op.type == "text":
            stages.append(_drawtext_stage(op, media_duration))
        else:
            raise InvalidOperation(f"Unsupported operation type: {op.type}")
    return stages


def build_filter_complex(
    stages: Sequence[FilterStage],
    input_label: str = "[0:v]",
) -> Tuple[str, Optional[str]]:
    """
    Chain stages into one ffmpeg filter_complex graph:

      [0:v]drawtext=...[v0]; [v0]drawtext=...[v1]; ...

    Returns:
      - filter_complex: the filter graph string ("" for no stages)
      - final_label: label of the last video output (e.g. '[v1]')
    """
    if not stages:
        return "", None

    chains: List[str] = []
    current_label = input_label

    for index, stage in enumerate(stages):
        out_label = f"[v{index}]"
        chains.append(f"{current_label}{stage.render()}{out_label}")
        current_label = out_label

    return "; ".join(chains), current_label
