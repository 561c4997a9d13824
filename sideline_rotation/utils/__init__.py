"""
Utilities package for the Sideline Rotation engine.

This package contains the clock helpers and configuration constants.
"""
from .time_utils import fmt_mmss, now_ts, whole_seconds
from .constants import APP_TITLE

__all__ = ["fmt_mmss", "now_ts", "whole_seconds", "APP_TITLE"]
