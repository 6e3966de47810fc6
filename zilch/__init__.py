"""Zilch: draw loops around roaming enemies to capture them."""
