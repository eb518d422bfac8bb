import pytest

from textburn.core.errors import InvalidOperation
from textburn.services.timeline import (
    MAX_ZOOM,
    MIN_ZOOM,
    Timeline,
    format_time,
    pixels_to_time,
    time_to_pixels,
)

EPSILON = 1e-9


@pytest.fixture
def timeline(session):
    return Timeline(session, duration=10)


@pytest.fixture
def track_id(session, timeline, make_overlay):
    return session.add_text(make_overlay(text="Hi", start=3, duration=5)).id


class TestPixelMapping:
    def test_zoom_one(self):
        assert time_to_pixels(5, 1) == 500

    def test_zoom_two(self):
        assert time_to_pixels(5, 2) == 1000

    @pytest.mark.parametrize("t", [0, 0.01, 1 / 3, 5, 9.99, 3600])
    @pytest.mark.parametrize("zoom", [0.2, 0.5, 1, 1.2, 2.0736, 5])
    def test_round_trip(self, t, zoom):
        assert pixels_to_time(time_to_pixels(t, zoom), zoom) == pytest.approx(t, abs=EPSILON)

    def test_non_positive_zoom_rejected(self):
        with pytest.raises(ValueError):
            pixels_to_time(100, 0)

    def test_timeline_uses_its_zoom(self, timeline):
        timeline.zoom = 2
        assert timeline.time_to_pixels(5) == 1000
        assert timeline.pixels_to_time(1000) == 5
        assert timeline.width == 2000


class TestZoom:
    def test_zoom_steps_are_multiplicative(self, timeline):
        assert timeline.zoom_in() == pytest.approx(1.2)
        assert timeline.zoom_in() == pytest.approx(1.44)
        assert timeline.zoom_out() == pytest.approx(1.2)

    def test_zoom_is_clamped(self, timeline):
        for _ in range(50):
            timeline.zoom_in()
        assert timeline.zoom == MAX_ZOOM
        for _ in range(100):
            timeline.zoom_out()
        assert timeline.zoom == MIN_ZOOM

    def test_initial_zoom_is_clamped(self, session):
        assert Timeline(session, 10, zoom=50).zoom == MAX_ZOOM
        assert Timeline(session, 10, zoom=0.01).zoom == MIN_ZOOM


class TestTracks:
    def test_one_track_per_overlay_sharing_its_id(self, session, timeline, make_overlay):
        a = session.add_text(make_overlay(text="a", start=0, duration=2))
        b = session.add_text(make_overlay(text="b", start=4, duration=3))
        tracks = timeline.tracks()
        assert [t.id for t in tracks] == [a.id, b.id]
        assert (tracks[1].start_time, tracks[1].end_time) == (4, 7)
        assert tracks[0].kind == "overlay"
        assert tracks[0].data == a

    def test_tracks_are_clamped_to_duration(self, session, timeline, make_overlay):
        op = session.add_text(make_overlay(start=8, duration=5))
        track = timeline.track(op.id)
        assert (track.start_time, track.end_time) == (8, 10)

    def test_geometry(self, timeline, track_id):
        timeline.zoom = 2
        assert timeline.track_geometry(timeline.track(track_id)) == (600, 1000)

    def test_unknown_track(self, timeline):
        with pytest.raises(InvalidOperation):
            timeline.apply_drag("missing", 1)


class TestDrag:
    def test_drag_shifts_both_bounds(self, session, timeline, track_id):
        track = timeline.apply_drag(track_id, 1.5)
        assert (track.start_time, track.end_time) == (4.5, 9.5)
        op = session.get(track_id)
        assert op.start == 4.5
        assert op.duration == pytest.approx(5)

    def test_drag_past_start_keeps_span(self, timeline, track_id):
        track = timeline.apply_drag(track_id, -5)
        assert track.start_time == 0
        assert track.end_time == pytest.approx(5)

    def test_drag_past_end_keeps_span(self, timeline, track_id):
        track = timeline.apply_drag(track_id, 4)
        assert track.start_time == pytest.approx(5)
        assert track.end_time == pytest.approx(10)

    def test_track_longer_than_timeline(self, session, timeline, make_overlay):
        op = session.add_text(make_overlay(start=0, duration=30))
        track = timeline.apply_drag(op.id, 3)
        assert (track.start_time, track.end_time) == (0, 10)

    @pytest.mark.parametrize("delta", [-100, -7.3, -0.1, 0, 0.2, 2.5, 6, 100])
    def test_drag_never_inverts_or_escapes(self, timeline, track_id, delta):
        track = timeline.apply_drag(track_id, delta)
        assert 0 <= track.start_time <= track.end_time <= timeline.duration

    def test_drag_does_not_touch_position(self, session, timeline, track_id):
        before = session.get(track_id).position
        timeline.apply_drag(track_id, 1)
        assert session.get(track_id).position == before


class TestResize:
    def test_resize_start(self, timeline, track_id):
        track = timeline.apply_resize(track_id, True, -1)
        assert (track.start_time, track.end_time) == (2, 8)

    def test_resize_end(self, timeline, track_id):
        track = timeline.apply_resize(track_id, False, 1)
        assert (track.start_time, track.end_time) == (3, 9)

    def test_start_cannot_pass_end(self, timeline, track_id):
        track = timeline.apply_resize(track_id, True, 20)
        assert track.start_time == track.end_time == 8

    def test_end_cannot_pass_start(self, timeline, track_id):
        track = timeline.apply_resize(track_id, False, -20)
        assert track.start_time == track.end_time == 3

    def test_resize_clamped_to_timeline(self, timeline, track_id):
        assert timeline.apply_resize(track_id, True, -20).start_time == 0
        assert timeline.apply_resize(track_id, False, 20).end_time == 10

    def test_resize_writes_back(self, session, timeline, track_id):
        timeline.apply_resize(track_id, True, 1)
        op = session.get(track_id)
        assert op.start == 4
        assert op.end == pytest.approx(8)


class TestDeleteAndSeek:
    def test_delete_removes_overlay(self, session, timeline, track_id):
        timeline.delete_track(track_id)
        assert session.get_operations() == []
        assert timeline.tracks() == []

    def test_seek_is_clamped(self, timeline):
        assert timeline.seek(250) == 2.5
        assert timeline.seek(-40) == 0
        assert timeline.seek(5000) == 10

    def test_drag_delta_in_seconds(self, timeline):
        timeline.zoom = 2
        assert timeline.drag_delta(300) == 1.5


class TestRuler:
    def test_one_second_steps_at_zoom_one(self, timeline):
        markers = timeline.ruler_markers()
        assert len(markers) == 11
        assert markers[3] == (3.0, 300.0, "0:03")

    def test_five_second_steps_when_zoomed_out(self, session):
        timeline = Timeline(session, 12, zoom=0.5)
        assert [m[0] for m in timeline.ruler_markers()] == [0, 5, 10]

    @pytest.mark.parametrize("seconds, label", [(0, "0:00"), (9.9, "0:09"), (75, "1:15"), (600, "10:00")])
    def test_format_time(self, seconds, label):
        assert format_time(seconds) == label
