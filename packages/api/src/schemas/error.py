# This project was developed with assistance from AI tools.
"""Error envelope returned by every failing request."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """``{"error": "<message>"}`` -- a human-readable message, no codes."""

    error: str = Field(description="Human-readable explanation of the failure.")
