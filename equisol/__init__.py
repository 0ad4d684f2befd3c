"""
Equinox & Solstice Calculator

Dates and times of the March and September equinoxes and the June and
December solstices for years 1000-3000, in any IANA timezone.
"""

__version__ = "1.0.0"

# Version information
VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
}
