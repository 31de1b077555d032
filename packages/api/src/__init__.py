# This project was developed with assistance from AI tools.
"""VisaDesk API: role-scoped visa consultancy management."""

__version__ = "0.1.0"
