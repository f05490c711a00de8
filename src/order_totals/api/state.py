"""Process-wide objects shared by the API routes."""
from ..config.settings import get_settings
from ..engine import ComputeOptions, TotalsCalculator

settings = get_settings()

calculator = TotalsCalculator(
    max_entries=settings.cache_size,
    options=ComputeOptions(
        include_line_level_calculations=settings.include_line_level_calculations
    ),
)
