import threading

import pytest

from flameshot.slider import ExtendedSlider


def test_value_is_clamped():
    slider = ExtendedSlider(0, 100)
    slider.value = 500
    assert slider.value == slider.maximum
    slider.value = -20
    assert slider.value == slider.minimum


def test_mapped_value_endpoints():
    slider = ExtendedSlider(0, 100)
    slider.value = slider.minimum
    assert slider.mapped_value(0, 255) == 0
    slider.value = slider.maximum
    assert slider.mapped_value(0, 255) == 255


def test_mapped_value_is_monotonic():
    slider = ExtendedSlider(0, 100)
    results = []
    for value in (10, 40, 70):
        slider.value = value
        results.append(slider.mapped_value(0, 255))
    assert results == sorted(results)


def test_set_mapped_value_top_is_clamped():
    slider = ExtendedSlider(0, 100)
    slider.set_mapped_value(0, 255, 255)
    assert slider.value == slider.maximum


def test_set_mapped_value_round_trip_is_close():
    slider = ExtendedSlider(0, 100)
    slider.set_mapped_value(0, 128, 255)
    assert abs(slider.mapped_value(0, 255) - 128) <= 3


def test_tooltip_shows_percentage():
    slider = ExtendedSlider(0, 100, 42)
    assert slider.tooltip() == "42%"


def test_value_changed_listener():
    slider = ExtendedSlider(0, 100)
    seen = []
    slider.value_changed.append(seen.append)
    slider.value = 30
    slider.value = 30
    assert seen == [30]


def test_zero_range_mapping_raises():
    slider = ExtendedSlider(5, 5)
    with pytest.raises(ZeroDivisionError):
        slider.mapped_value(0, 255)


def test_slider_moved_fires_modifications_ended():
    slider = ExtendedSlider(0, 100, debounce=0.01)
    done = threading.Event()
    slider.modifications_ended.append(done.set)
    slider.slider_moved(60)
    assert done.wait(2)
    assert slider.value == 60