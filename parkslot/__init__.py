"""
parkslot - parking place reservations over a rolling work week.
"""

__version__ = "0.1.0"
