# This project was developed with assistance from AI tools.
"""Domain services. Services raise ``core.errors`` exceptions and own the commit."""
