"""
Utilities Module
================

Helper functions and utility classes.
"""

from cortexia.utils.helpers import generate_id, round_half_up, utc_now, utc_today

__all__ = ["generate_id", "round_half_up", "utc_now", "utc_today"]
