"""Engine subpackage - core pricing logic and catalog types."""
from .pricing_engine import PricingEngine, round_half_up
from .models import Catalog, Step, Option, StepBreakdown, SelectedOption, Estimate

__all__ = [
    'PricingEngine', 'round_half_up',
    'Catalog', 'Step', 'Option', 'StepBreakdown', 'SelectedOption', 'Estimate',
]
