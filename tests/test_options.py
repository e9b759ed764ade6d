"""
Tests for chart option normalization.
"""

from epicharts.options import ChartOptions, normalize_options


def test_defaults():
    assert normalize_options(None) == ChartOptions()
    assert normalize_options({}) == ChartOptions()


def test_values_are_coerced():
    opts = normalize_options(
        {"width": "640", "scale_factor": 1, "other_label": " Rest ", "week_scheme": "MMWR", "window_days": "28"}
    )
    assert opts == ChartOptions(width=640.0, scale_factor=1.0, other_label="Rest", week_scheme="mmwr", window_days=28)


def test_bad_values_fall_back():
    opts = normalize_options({"width": "wide", "scale_factor": None, "week_scheme": "iso", "window_days": 0})
    assert opts.width == 800.0
    assert opts.scale_factor == 100.0
    assert opts.week_scheme == "jan1"
    assert opts.window_days is None


def test_width_is_clamped():
    assert normalize_options({"width": -20}).width == 0.0


def test_window_rejects_bool():
    assert normalize_options({"window_days": True}).window_days is None
