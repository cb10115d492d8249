import pytest

from holdcalc.engine import (
    acute_angle, angle_between, apply_correction, calculate_drift, compute_hold,
    drift_factor, interpolate_wind, magnetic_wind, max_drift, normalize360,
    outbound_correction, outbound_timing, round_wind, signed_angle, time_factor,
)
from holdcalc.models import AltitudeBand, WindVector


def band(alt, direction, speed):
    return AltitudeBand(alt, WindVector(direction, speed))


# ------------------------------------ angles -------------------------------------

def test_normalize360_wraps_both_ways():
    assert normalize360(370) == 10
    assert normalize360(-10) == 350
    assert normalize360(360) == 0


def test_signed_angle_range():
    assert signed_angle(180) == 180
    assert signed_angle(-180) == 180
    assert signed_angle(270) == -90


def test_angle_between_folds_past_180():
    assert angle_between(90, 300) == 150
    assert angle_between(10, 350) == 20


def test_acute_angle():
    assert acute_angle(150) == 30
    assert acute_angle(90) == 90


# ------------------------------------- wind --------------------------------------

def test_equal_altitudes_return_low_wind():
    low = band(4000, 123, 17)
    high = band(4000, 300, 55)
    assert interpolate_wind(9000, low, high) == low.wind


def test_direction_interpolates_the_short_way_through_north():
    wind = interpolate_wind(2000, band(1000, 350, 10), band(3000, 10, 30))
    assert wind.direction_deg == pytest.approx(0.0)
    assert round_wind(wind).direction_deg == 0
    assert wind.speed_kt == pytest.approx(20.0)


def test_ratio_is_not_clamped():
    wind = interpolate_wind(9000, band(3000, 270, 20), band(6000, 300, 40))
    assert wind.direction_deg == pytest.approx(330.0)
    assert wind.speed_kt == pytest.approx(60.0)


def test_round_wind_and_magnetic():
    wind = round_wind(WindVector(289.6, 33.4))
    assert (wind.direction_deg, wind.speed_kt) == (290, 33)
    mag = magnetic_wind(wind, -300)
    assert (mag.direction_deg, mag.speed_kt) == (350, 33)


def test_round_wind_wraps_360():
    assert round_wind(WindVector(359.7, 10)).direction_deg == 0


# ------------------------------------- drift -------------------------------------

def test_max_drift_rounds_half_up():
    assert max_drift(33, 120) == 17


def test_max_drift_non_positive_tas_uses_default():
    assert max_drift(30, 0) == 15
    assert max_drift(30, -50) == 15


@pytest.mark.parametrize("angle, factor, text", [
    (90, 1.0, "1"),
    (53, 1.0, "1"),
    (52.9, 0.75, "3/4"),
    (38, 0.75, "3/4"),
    (37.9, 0.5, "1/2"),
    (23, 0.5, "1/2"),
    (22.9, 1 / 3, "1/3"),
    (0.1, 1 / 3, "1/3"),
    (0, 0.0, "0"),
])
def test_drift_factor_buckets(angle, factor, text):
    assert drift_factor(angle) == (pytest.approx(factor), text)


def test_calculate_drift_uses_acute_angle():
    res = calculate_drift(90, 300, 17)
    assert res.acute_angle_deg == 30
    assert res.factor_text == "1/2"
    assert res.single_drift_deg == 9


def test_drift_with_wind_on_the_nose_is_zero():
    assert calculate_drift(180, 0, 20).single_drift_deg == 0


# ----------------------------------- headings ------------------------------------

def test_wind_from_right_adds_correction():
    assert apply_correction(360, 90, 7) == 7


def test_wind_from_left_subtracts_correction():
    assert apply_correction(90, 300, 9) == 81
    assert apply_correction(5, 300, 10) == 355


def test_outbound_correction_multiplier():
    assert outbound_correction(calculate_drift(270, 300, 17)) == (18, "2x SingleDrift (9) = 18")
    total, text = outbound_correction(calculate_drift(270, 320, 17))
    assert total == 39
    assert text.startswith("3x")


# ------------------------------------ timing -------------------------------------

@pytest.mark.parametrize("angle, factor", [
    (90, 1.0),
    (60, 1.0),
    (53, 1.0),
    (52.9, 0.75),
    (45, 0.75),
    (38, 0.75),
    (37.9, 0.5),
    (23, 0.5),
    (22.9, 1 / 3),
    (0.1, 1 / 3),
    (0, 0.0),
])
def test_time_factor_table(angle, factor):
    assert time_factor(angle) == pytest.approx(factor)


def test_wind_abeam_counts_as_headwind_side():
    res = outbound_timing(0, 90, 20, 60)
    assert res.is_tailwind is False
    assert res.time_factor == 0
    assert res.adjusted_time_sec == 60


def test_headwind_inbound_shortens_outbound():
    res = outbound_timing(360, 30, 30, 60)
    assert res.is_tailwind is True
    assert res.time_factor == 1.0
    assert res.adjusted_time_sec == 30


def test_tailwind_inbound_lengthens_outbound():
    res = outbound_timing(90, 300, 33, 60)
    assert res.is_tailwind is False
    assert res.adjusted_time_sec == 93


@pytest.mark.parametrize("wind_dir, factor, adjusted", [
    (37, 1.0, 40.0),    # 90 - 37 = 53
    (52, 0.75, 45.0),   # 90 - 52 = 38
    (67, 0.5, 50.0),    # 90 - 67 = 23
])
def test_outbound_timing_on_bucket_edges(wind_dir, factor, adjusted):
    res = outbound_timing(0, wind_dir, 20, 60)
    assert res.is_tailwind is True
    assert res.time_factor == pytest.approx(factor)
    assert res.adjusted_time_sec == pytest.approx(adjusted)


# ---------------------------------- end to end -----------------------------------

@pytest.fixture
def scenario():
    return compute_hold(
        target_altitude="5000", low_altitude="3000", low_wind="270/20",
        high_altitude="6000", high_wind="300/40", magnetic_variation="10",
        inbound_course="90", true_airspeed="120", outbound_base_time="60",
    )


def test_scenario_labels(scenario):
    assert scenario.labels() == {
        "wind": "290/33",
        "mag_wind": "300/33",
        "max_drift": "17°",
        "inbound_drift": "30°(1/2) -> 9",
        "inbound_heading": "081°",
        "outbound_course": "270",
        "outbound_drift": "9.0",
        "outbound_correction": "2x SingleDrift (9) = 18",
        "outbound_heading": "288°",
        "outbound_time": "93 sec",
        "gate2": "030°",
    }


def test_scenario_geometry(scenario):
    geo = scenario.geometry
    assert geo.inbound_track_deg == 90
    assert geo.outbound_track_deg == 270
    assert geo.inbound_heading_deg == 81
    assert geo.outbound_heading_deg == 288
    assert geo.gate1_time_sec == 93


@pytest.mark.parametrize("course", [0, 45, 90, 179.5, 180, 270, 359])
def test_outbound_course_is_reciprocal(course):
    res = compute_hold(5000, 3000, "270/20", 6000, "300/40", 0, course)
    assert res.outbound_course == pytest.approx((course + 180) % 360)


def test_garbage_inputs_still_compute():
    res = compute_hold("", None, "abc", "x", "/", "?", "", true_airspeed="0", outbound_base_time="")
    assert res.wind_display == "000/0"
    assert res.max_drift == 0
    assert res.outbound_time_sec == 60
    assert res.outbound_course == 180


def test_course_outside_range_is_wrapped():
    res = compute_hold(5000, 3000, "270/20", 6000, "300/40", 10, "450")
    assert res.inbound_course == 90
    assert res.labels()["inbound_heading"] == "081°"


@pytest.mark.parametrize("kwargs", [
    {"target_altitude": "1e999"},
    {"magnetic_variation": "1e999"},
    {"inbound_course": "1e999"},
    {"outbound_base_time": "1e999"},
    {"target_altitude": "1e307", "low_altitude": 0, "high_altitude": 1},
])
def test_overflowing_inputs_still_compute(kwargs):
    args = dict(
        target_altitude=5000, low_altitude=3000, low_wind="270/20",
        high_altitude=6000, high_wind="300/40", magnetic_variation=10, inbound_course=90,
    )
    args.update(kwargs)
    res = compute_hold(**args)
    labels = res.labels()
    assert len(labels["inbound_heading"]) == 4
    assert isinstance(res.outbound_time_sec, int)


def test_wind_overflowing_to_infinity_reads_as_calm():
    res = compute_hold("1e307", 0, "270/20", 1, "300/40", 0, 90)
    assert res.wind_display == "000/0"
    assert res.max_drift == 0


def test_heading_just_below_north_displays_as_000():
    res = compute_hold(5000, 3000, "0/0", 6000, "0/0", 0, "359.7")
    assert res.inbound_heading == pytest.approx(359.7)
    assert res.labels()["inbound_heading"] == "000°"
    assert res.geometry.inbound_heading_deg == 0


def test_gate2_just_below_north_displays_as_000():
    res = compute_hold(5000, 3000, "0/0", 6000, "0/0", 0, "59.7")
    assert res.labels()["gate2"] == "000°"
