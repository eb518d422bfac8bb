import logging
from dataclasses import dataclass
from typing import List, Literal, Tuple

from textburn.core.errors import InvalidOperation
from textburn.schemas.operations import Operation, OverlayPatch
from textburn.services.editor import EditSession

logger = logging.getLogger(__name__)

BASE_PIXELS_PER_SECOND = 100.0
ZOOM_STEP = 1.2
MIN_ZOOM = 0.2
MAX_ZOOM = 5.0

TrackKind = Literal["overlay"]


def time_to_pixels(t: float, zoom: float = 1.0) -> float:
    return t * BASE_PIXELS_PER_SECOND * zoom


def pixels_to_time(p: float, zoom: float = 1.0) -> float:
    if zoom <= 0:
        raise ValueError(f"zoom must be positive, got {zoom}")
    return p / (BASE_PIXELS_PER_SECOND * zoom)


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


def format_time(seconds: float) -> str:
    """Ruler label, e.g. 75 -> '1:15'."""
    minutes = int(seconds // 60)
    remaining = int(seconds % 60)
    return f"{minutes}:{remaining:02d}"


@dataclass(frozen=True)
class TimelineTrack:
    id: str
    start_time: float
    end_time: float
    data: Operation
    kind: TrackKind = "overlay"

    @property
    def span(self) -> float:
        return self.end_time - self.start_time


class Timeline:
    """
    Time-axis view over an EditSession.

    Tracks are derived from the session on every read and every gesture
    writes straight back into the session, so the timeline never holds
    overlay data of its own. A track's id is the overlay's id.
    """

    def __init__(self, session: EditSession, duration: float, zoom: float = 1.0):
        self.session = session
        self.duration = max(0.0, float(duration))
        self.zoom = clamp_zoom(zoom)

    # -- zoom / coordinates ------------------------------------------------

    def zoom_in(self) -> float:
        self.zoom = clamp_zoom(self.zoom * ZOOM_STEP)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = clamp_zoom(self.zoom / ZOOM_STEP)
        return self.zoom

    def time_to_pixels(self, t: float) -> float:
        return time_to_pixels(t, self.zoom)

    def pixels_to_time(self, p: float) -> float:
        return pixels_to_time(p, self.zoom)

    @property
    def width(self) -> float:
        return self.time_to_pixels(self.duration)

    def seek(self, pixel: float) -> float:
        """Playhead time for a click at `pixel` from the timeline's left edge."""
        return self._clamp_time(self.pixels_to_time(pixel))

    def drag_delta(self, delta_pixels: float) -> float:
        return delta_pixels / self.time_to_pixels(1)

    def ruler_markers(self) -> List[Tuple[float, float, str]]:
        """(time, pixel, label) for each ruler tick."""
        step = 1 if self.zoom >= 1 else 5
        markers = []
        t = 0
        while t <= self.duration:
            markers.append((float(t), self.time_to_pixels(t), format_time(t)))
            t += step
        return markers

    def track_geometry(self, track: TimelineTrack) -> Tuple[float, float]:
        """(left, width) of a track in pixels."""
        return self.time_to_pixels(track.start_time), self.time_to_pixels(track.span)

    # -- tracks --------------------------------------------------------------

    def tracks(self) -> List[TimelineTrack]:
        return [self._to_track(op) for op in self.session.get_operations()]

    def track(self, track_id: str) -> TimelineTrack:
        return self._to_track(self.session.get(track_id))

    def apply_drag(self, track_id: str, delta_time: float) -> TimelineTrack:
        """
        Shift both bounds by `delta_time`, sliding the whole window back
        inside [0, duration] so its span is kept. A span longer than the
        timeline is cut down to the timeline.
        """
        track = self.track(track_id)
        span = min(track.span, self.duration)
        start = track.start_time + delta_time
        start = max(0.0, min(start, self.duration - span))
        return self._write_back(track_id, start, start + span)

    def apply_resize(
        self,
        track_id: str,
        is_start: bool,
        delta_time: float,
    ) -> TimelineTrack:
        """
        Move one bound by `delta_time`. The moving bound stops at the
        timeline edge and at the fixed bound; the two are never swapped.
        """
        track = self.track(track_id)
        start, end = track.start_time, track.end_time
        if is_start:
            start = max(0.0, min(start + delta_time, end))
        else:
            end = min(self.duration, max(end + delta_time, start))
        return self._write_back(track_id, start, end)

    def delete_track(self, track_id: str) -> None:
        self.session.remove(track_id)

    # -- internals -----------------------------------------------------------

    def _clamp_time(self, t: float) -> float:
        return max(0.0, min(self.duration, t))

    def _to_track(self, op: Operation) -> TimelineTrack:
        if op.type != "text":
            raise InvalidOperation(f"No timeline track for operation type: {op.type}")
        start = self._clamp_time(op.start)
        end = max(start, self._clamp_time(op.end))
        return TimelineTrack(id=op.id, start_time=start, end_time=end, data=op)

    def _write_back(self, track_id: str, start: float, end: float) -> TimelineTrack:
        op = self.session.apply_edit(
            track_id, OverlayPatch(start=start, duration=end - start)
        )
        logger.debug("Track %s now spans %.3f-%.3fs", track_id, start, end)
        return self._to_track(op)
