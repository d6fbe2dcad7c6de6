"""
Easing Models

Easing functions map normalized progress (t: 0.0-1.0) to an eased factor.
Curves are addressed by GSAP-style names so configuration files can say
"elastic.out(1, 0.3)" or "power2.inOut".
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from models.enums import EaseDirection

EaseFunction = Callable[[float], float]

TWO_PI = math.pi * 2


# === Easing Functions ===

def ease_linear(t: float) -> float:
    """
    Linear easing (constant speed)

    Args:
        t: Progress (0.0 = start, 1.0 = end)

    Returns:
        Eased factor
    """
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in (slow start → fast end)"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out (fast start → slow end)"""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Quadratic ease-in-out (slow start → fast middle → slow end)"""
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    """Cubic ease-in (very slow start)"""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out (very slow end)"""
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out (very smooth acceleration/deceleration)"""
    return 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def ease_in_sine(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def ease_out_sine(t: float) -> float:
    return math.sin(t * math.pi / 2)


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def make_elastic_out(amplitude: float = 1.0, period: float = 0.3) -> EaseFunction:
    """
    Elastic ease-out: overshoots the target and settles with a decaying wobble

    Amplitudes below 1 shorten the period instead of damping the curve, which
    keeps the curve anchored at 0 for t=0.

    Args:
        amplitude: Overshoot strength (>= 1 scales the wobble)
        period: Wobble period in normalized time

    Example:
        ease = make_elastic_out(1, 0.3)
        ease(0.0)   # 0.0
        ease(1.0)   # 1.0
    """
    p1 = amplitude if amplitude >= 1 else 1.0
    p2 = period / (amplitude if amplitude < 1 else 1.0)
    p3 = p2 / TWO_PI * math.asin(1 / p1)
    frequency = TWO_PI / p2

    def ease(t: float) -> float:
        if t >= 1:
            return 1.0
        return p1 * 2 ** (-10 * t) * math.sin((t - p3) * frequency) + 1

    return ease


def make_back_out(overshoot: float = 1.70158) -> EaseFunction:
    """Back ease-out: overshoots once, no wobble"""
    def ease(t: float) -> float:
        if t >= 1:
            return 1.0
        t -= 1
        return t * t * ((overshoot + 1) * t + overshoot) + 1

    return ease


def reverse_ease(ease_out: EaseFunction) -> EaseFunction:
    """Derive an ease-in curve from an ease-out curve"""
    return lambda t: 1 - ease_out(1 - t)


def mirror_ease(ease_out: EaseFunction) -> EaseFunction:
    """Derive an ease-in-out curve from an ease-out curve"""
    return lambda t: (1 - ease_out(1 - t * 2)) / 2 if t < 0.5 else 0.5 + ease_out((t - 0.5) * 2) / 2


# === Named easing registry ===

_FIXED_CURVES: Dict[str, Dict[EaseDirection, EaseFunction]] = {
    "quad": {
        EaseDirection.IN: ease_in_quad,
        EaseDirection.OUT: ease_out_quad,
        EaseDirection.IN_OUT: ease_in_out_quad,
    },
    "cubic": {
        EaseDirection.IN: ease_in_cubic,
        EaseDirection.OUT: ease_out_cubic,
        EaseDirection.IN_OUT: ease_in_out_cubic,
    },
    "sine": {
        EaseDirection.IN: ease_in_sine,
        EaseDirection.OUT: ease_out_sine,
        EaseDirection.IN_OUT: ease_in_out_sine,
    },
}

# GSAP power names
_ALIASES = {
    "power1": "quad",
    "power2": "cubic",
}

_EASE_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9]*)(?:\.(in|out|inOut))?(?:\((.*)\))?$")


@dataclass(frozen=True)
class EaseSpec:
    """
    Parsed easing descriptor

    Attributes:
        name: Curve family ("elastic", "quad", "linear", ...)
        direction: IN, OUT or IN_OUT
        params: Curve parameters (elastic: amplitude, period; back: overshoot)
    """
    name: str
    direction: EaseDirection = EaseDirection.OUT
    params: Tuple[float, ...] = ()

    def __str__(self) -> str:
        if self.name in ("linear", "none"):
            return self.name
        text = f"{self.name}.{self.direction.value}"
        if self.params:
            text += "(" + ", ".join(f"{p:g}" for p in self.params) + ")"
        return text

    def build(self) -> EaseFunction:
        """Create the easing function for this spec"""
        if self.name in ("linear", "none"):
            return ease_linear

        if self.name == "elastic":
            amplitude = self.params[0] if len(self.params) > 0 else 1.0
            period = self.params[1] if len(self.params) > 1 else (
                0.3 if self.direction == EaseDirection.OUT else 0.45
            )
            if amplitude <= 0 or period <= 0:
                raise ValueError("elastic amplitude and period must be positive")
            out = make_elastic_out(amplitude, period)
        elif self.name == "back":
            out = make_back_out(self.params[0] if self.params else 1.70158)
        else:
            family = _FIXED_CURVES.get(_ALIASES.get(self.name, self.name))
            if family is None:
                raise ValueError(f"Unknown easing curve: {self.name}")
            return family[self.direction]

        if self.direction == EaseDirection.IN:
            return reverse_ease(out)
        if self.direction == EaseDirection.IN_OUT:
            return mirror_ease(out)
        return out


def parse_ease(text: str) -> EaseSpec:
    """
    Parse a GSAP-style easing name

    Direction defaults to "out" like GSAP.

    Example:
        parse_ease("elastic.out(1, 0.3)")  # EaseSpec("elastic", OUT, (1.0, 0.3))
        parse_ease("power2.inOut")         # EaseSpec("power2", IN_OUT, ())
        parse_ease("linear")               # EaseSpec("linear", OUT, ())

    Raises:
        ValueError: Unrecognized syntax, curve or parameters
    """
    match = _EASE_RE.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise ValueError(f"Unrecognized easing: {text!r}")

    name, direction, raw_params = match.groups()
    params: Tuple[float, ...] = ()
    if raw_params and raw_params.strip():
        try:
            params = tuple(float(p) for p in raw_params.split(","))
        except ValueError:
            raise ValueError(f"Invalid easing parameters: {raw_params!r}")

    spec = EaseSpec(
        name=name,
        direction=EaseDirection(direction) if direction else EaseDirection.OUT,
        params=params,
    )
    # Fail on unknown curves at parse time, not on first tick
    spec.build()
    return spec


def resolve_ease(ease: "str | EaseSpec | EaseFunction") -> Tuple[str, EaseFunction]:
    """
    Turn any accepted ease description into (label, function)

    Raises:
        ValueError: If a string/spec cannot be resolved
    """
    if isinstance(ease, EaseSpec):
        return str(ease), ease.build()
    if isinstance(ease, str):
        spec = parse_ease(ease)
        return str(spec), spec.build()
    if callable(ease):
        return getattr(ease, "__name__", "custom"), ease
    raise ValueError(f"Unsupported easing: {ease!r}")


DEFAULT_EASE = "elastic.out(1, 0.3)"
