"""
Models package - Data models for the reveal section core
"""

from .enums import TargetPhase, RunStatus, RestartMode, EaseDirection, LogLevel, LogCategory
from .color import RGBA, ColorSpec, ThemePalette, SelectionColors
from .region import ObservedRegion
from .geometry import Rect, visible_ratio
from .target import AnimatableTarget, VisualState, TargetUpdate, INITIAL_STATE, FINAL_STATE
from .animation import StaggerOptions, AnimationRun

__all__ = [
    'TargetPhase',
    'RunStatus',
    'RestartMode',
    'EaseDirection',
    'LogLevel',
    'LogCategory',
    'RGBA',
    'ColorSpec',
    'ThemePalette',
    'SelectionColors',
    'ObservedRegion',
    'Rect',
    'visible_ratio',
    'AnimatableTarget',
    'VisualState',
    'TargetUpdate',
    'INITIAL_STATE',
    'FINAL_STATE',
    'StaggerOptions',
    'AnimationRun',
]
