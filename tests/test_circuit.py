import math

import pytest

from poynting_canvas import CircuitConfiguration, DomainError, Mode, evaluate


def test_dc_scenario_constant_over_time(dc_config):
    states = [evaluate(dc_config, t) for t in (0.0, 0.13, 1.0, 57.31)]
    for s in states:
        assert s.current == 2.0
        assert s.power == 20.0
        assert s.ac_phase == 1.0
        assert s.instantaneous_current == 2.0
        assert s.instantaneous_power == 20.0


def test_ac_quarter_period(ac_config):
    s = evaluate(ac_config, 0.25)
    assert s.ac_phase == pytest.approx(1.0)
    assert s.instantaneous_current == pytest.approx(2.0)
    assert s.instantaneous_power == pytest.approx(20.0)


def test_ac_three_quarter_period_flips_current_not_power(ac_config):
    s = evaluate(ac_config, 0.75)
    assert s.ac_phase == pytest.approx(-1.0)
    assert s.instantaneous_current == pytest.approx(-2.0)
    assert s.instantaneous_power == pytest.approx(20.0)


@pytest.mark.parametrize("freq", [0.3, 1.0, 2.5])
def test_ac_power_follows_sine_squared(freq):
    cfg = CircuitConfiguration(mode=Mode.AC, source_voltage=12.0, load_resistance=4.0, frequency=freq)
    for k in range(200):
        t = k * 0.0137
        s = evaluate(cfg, t)
        expected = 36.0 * math.sin(2 * math.pi * freq * t) ** 2
        assert s.instantaneous_power >= 0
        assert s.instantaneous_power == pytest.approx(expected, abs=1e-12)
        assert math.copysign(1, s.instantaneous_current) == math.copysign(1, s.ac_phase) or s.ac_phase == 0


def test_ac_low_frequency_is_continuous():
    cfg = CircuitConfiguration(mode=Mode.AC, frequency=1e-6)
    s = evaluate(cfg, 1.0)
    assert abs(s.ac_phase) < 1e-5
    assert math.isfinite(s.instantaneous_power)


def test_evaluate_is_idempotent(ac_config):
    assert evaluate(ac_config, 0.37) == evaluate(ac_config, 0.37)


@pytest.mark.parametrize("r", [0.0, -5.0, float("nan"), float("inf")])
def test_bad_resistance_raises(r):
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(load_resistance=r), 0.0)


def test_bad_voltage_raises():
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(source_voltage=0.0), 0.0)


def test_ac_needs_positive_frequency():
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(mode=Mode.AC, frequency=0.0), 0.0)
    # frequency is ignored in DC
    assert evaluate(CircuitConfiguration(mode=Mode.DC, frequency=0.0), 0.0).current == 2.0


def test_domain_error_is_value_error():
    assert issubclass(DomainError, ValueError)


def test_overflowing_current_raises():
    # both inputs are finite and positive, V/R is not
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(source_voltage=1e300, load_resistance=1e-10), 0.5)
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(mode=Mode.AC, source_voltage=1e300, load_resistance=1e-10), 0.25)


def test_overflowing_power_raises():
    # I = 1e200 is finite, P = V*I is not
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(source_voltage=1e200, load_resistance=1.0), 0.0)


@pytest.mark.parametrize("mode", [7, -1, "AC"])
def test_unknown_mode_raises(mode):
    with pytest.raises(DomainError):
        evaluate(CircuitConfiguration(mode=mode), 0.0)
