"""
Tests for easing curves and GSAP-style ease names
"""

import pytest

from models.easing import (
    EaseSpec,
    ease_in_out_cubic,
    ease_linear,
    make_elastic_out,
    parse_ease,
    resolve_ease,
)
from models.enums import EaseDirection


class TestElastic:

    def test_endpoints(self):
        ease = make_elastic_out(1, 0.3)

        assert ease(0.0) == pytest.approx(0.0, abs=1e-9)
        assert ease(1.0) == 1.0

    def test_overshoots_then_settles(self):
        ease = make_elastic_out(1, 0.3)

        assert ease(0.1) == pytest.approx(1.25, abs=1e-9)
        assert abs(ease(0.9) - 1.0) < 0.01

    def test_in_and_in_out_anchor_endpoints(self):
        for text in ("elastic.in(1, 0.3)", "elastic.inOut(1, 0.45)"):
            _, ease = resolve_ease(text)
            assert ease(0.0) == pytest.approx(0.0, abs=1e-9)
            assert ease(1.0) == pytest.approx(1.0, abs=1e-9)

    def test_amplitude_below_one_keeps_endpoints(self):
        ease = make_elastic_out(0.5, 0.3)

        assert ease(0.0) == pytest.approx(0.0, abs=1e-9)
        assert ease(1.0) == 1.0


class TestParseEase:

    def test_elastic_with_params(self):
        spec = parse_ease("elastic.out(1, 0.3)")

        assert spec == EaseSpec("elastic", EaseDirection.OUT, (1.0, 0.3))
        assert str(spec) == "elastic.out(1, 0.3)"

    def test_direction_defaults_to_out(self):
        assert parse_ease("back").direction == EaseDirection.OUT
        assert str(parse_ease("elastic")) == "elastic.out"

    def test_power_alias(self):
        label, ease = resolve_ease("power2.inOut")

        assert label == "power2.inOut"
        assert ease is ease_in_out_cubic

    def test_linear(self):
        label, ease = resolve_ease("linear")

        assert label == "linear"
        assert ease is ease_linear

    @pytest.mark.parametrize("text", [
        "bogus.out",
        "elastic.sideways",
        "elastic.out(a, b)",
        "elastic.out(0, 0.3)",
        "elastic.out(1, -1)",
        "",
        "quad.out(",
    ])
    def test_rejected(self, text):
        with pytest.raises(ValueError):
            parse_ease(text)

    def test_callable_passthrough(self):
        def my_curve(t):
            return t * t

        label, ease = resolve_ease(my_curve)

        assert label == "my_curve"
        assert ease is my_curve

    def test_unsupported_type(self):
        with pytest.raises(ValueError):
            resolve_ease(42)


@pytest.mark.parametrize("name", [
    "quad.in", "quad.out", "quad.inOut",
    "cubic.in", "cubic.out", "cubic.inOut",
    "sine.in", "sine.out", "sine.inOut",
    "back.out", "power1.out",
])
def test_named_curves_are_normalized(name):
    _, ease = resolve_ease(name)

    assert ease(0.0) == pytest.approx(0.0, abs=1e-9)
    assert ease(1.0) == pytest.approx(1.0, abs=1e-9)
