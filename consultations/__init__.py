"""Online Consultations desktop client."""

__version__ = "1.0.0"
