"""Tests for core data models."""

from fastosu.models import (
    Beatmap,
    Circle,
    CurvePoint,
    CurveType,
    GameMode,
    HitObject,
    Slider,
    Spinner,
    TimingPoint,
)


def test_uninherited_timing_point_bpm():
    point = TimingPoint(time=0, beat_length=500.0, meter=4, uninherited=True)
    assert point.bpm == 120.0
    assert point.slider_velocity == 1.0


def test_inherited_timing_point_slider_velocity():
    point = TimingPoint(time=1000, beat_length=-50.0, meter=4, uninherited=False)
    assert point.bpm is None
    assert point.slider_velocity == 2.0


def test_hit_object_variant_flags():
    circle = HitObject(x=0, y=0, time=0, type=5)
    slider = HitObject(x=0, y=0, time=0, type=2, params=Slider(curve_type=CurveType.LINEAR))
    spinner = HitObject(x=0, y=0, time=0, type=8, params=Spinner(end_time=10))

    assert circle.is_circle and circle.new_combo
    assert slider.is_slider and not slider.is_spinner
    assert spinner.is_spinner and not spinner.is_circle


def test_object_counts():
    beatmap = Beatmap(hit_objects=[
        HitObject(x=0, y=0, time=0, type=1),
        HitObject(x=0, y=0, time=1, type=2, params=Slider(curve_type=CurveType.BEZIER)),
        HitObject(x=0, y=0, time=2, type=2, params=Slider(curve_type=CurveType.PERFECT)),
        HitObject(x=0, y=0, time=3, type=8, params=Spinner(end_time=5)),
    ])
    assert beatmap.object_counts() == {"circles": 1, "sliders": 2, "spinners": 1}


def test_release_drops_every_list_once():
    curve = [CurvePoint(1, 2), CurvePoint(3, 4)]
    beatmap = Beatmap(
        mode=GameMode.STANDARD,
        timing_points=[TimingPoint(time=0, beat_length=500.0, meter=4, uninherited=True)],
        hit_objects=[
            HitObject(x=0, y=0, time=0, type=2, params=Slider(curve_type=CurveType.BEZIER, curve_points=curve)),
            HitObject(x=0, y=0, time=5, type=1, params=Circle()),
        ],
    )
    beatmap.release()
    assert curve == []
    assert beatmap.timing_points_count == 0
    assert beatmap.hit_objects_count == 0

    beatmap.release()
    assert beatmap.hit_objects == []
