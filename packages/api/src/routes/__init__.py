# This project was developed with assistance from AI tools.
"""HTTP routers, one module per audience."""
