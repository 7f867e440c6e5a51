"""FastAPI dependencies for shared request context."""

from datetime import date


async def get_today() -> date:
    """
    Current local date for preset and calendar calculations.

    Resolved once per request so every report in a response agrees on
    "today". Tests override this through app.dependency_overrides.
    """
    return date.today()
