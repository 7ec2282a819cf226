"""
Pricing Engine - Core estimate resolution logic.

Turns a mapping of step index → selected option ids into:
- Per-step subtotals
- A grand total with the timeline multiplier applied
- A structured per-step breakdown
- A plain-text summary for persistence and notifications

Malformed selections never raise. Unknown step indices, unknown option ids
and non-list values all contribute nothing, so stale client state (an old
cached catalog) still prices cleanly.
"""
from collections.abc import Mapping, Sequence
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from loguru import logger

from .models import Catalog, Step, SelectedOption, StepBreakdown, Estimate


DEFAULT_MULTIPLIER = Decimal("1")

Selections = Mapping[int, Sequence[str]]


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero (722.5 → 723)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _selected_ids(selections, step_index: int) -> Sequence:
    """Selected option ids for a step, empty for anything that is not a list."""
    if not isinstance(selections, Mapping):
        return ()
    chosen = selections.get(step_index)
    if isinstance(chosen, (str, bytes)) or not isinstance(chosen, Sequence):
        return ()
    return chosen


def _recognized(step: Step, selections, step_index: int):
    """Yield catalog options for every recognized selection, duplicates included."""
    for option_id in _selected_ids(selections, step_index):
        if not isinstance(option_id, str):
            continue
        option = step.find_option(option_id)
        if option is not None:
            yield option


class PricingEngine:
    """
    Computes project estimates against an immutable catalog.

    Resolution order for ``total``:
    1. Walk every step in catalog order
    2. Timeline step: a recognized option with a multiplier replaces the
       current multiplier (last one wins); others leave it unchanged
    3. Other steps: add base_price of every recognized option
    4. Round subtotal × multiplier half-up to whole currency units
    """

    def __init__(self, catalog: Optional[Catalog] = None):
        """Initialize engine with an explicit catalog, or the configured default."""
        if catalog is None:
            from ..data.build_catalog import load_default_catalog
            catalog = load_default_catalog()
        self.catalog = catalog

    def reload_catalog(self, catalog: Catalog):
        """Swap in a new catalog. The old one is never modified."""
        self.catalog = catalog
        logger.info(f"Catalog swapped: {len(catalog)} steps, {catalog.option_count} options")

    def step_total(self, step_index: int, selections: Selections) -> int:
        """Sum of base prices selected in one step, 0 for an unknown step."""
        step = self.catalog.step_at(step_index)
        if step is None:
            return 0
        return sum(option.base_price for option in _recognized(step, selections, step_index))

    def _subtotal_and_multiplier(self, catalog: Catalog, selections) -> tuple[int, Decimal]:
        subtotal = 0
        multiplier = DEFAULT_MULTIPLIER

        for index, step in enumerate(catalog.steps):
            for option in _recognized(step, selections, index):
                if step.is_timeline:
                    if option.multiplier is not None:
                        multiplier = option.multiplier
                else:
                    subtotal += option.base_price

        return subtotal, multiplier

    def total(self, selections: Selections) -> int:
        """Grand total: non-timeline subtotal × timeline multiplier, rounded."""
        subtotal, multiplier = self._subtotal_and_multiplier(self.catalog, selections)
        return round_half_up(Decimal(subtotal) * multiplier)

    def _breakdown(self, catalog: Catalog, selections) -> list[StepBreakdown]:
        breakdown = []
        for index, step in enumerate(catalog.steps):
            options = [
                SelectedOption(name=opt.name, price=opt.base_price, description=opt.description)
                for opt in _recognized(step, selections, index)
            ]
            if options:
                breakdown.append(StepBreakdown(
                    step_title=step.title,
                    options=options,
                    total=sum(opt.price for opt in options),
                ))
        return breakdown

    def breakdown_by_step(self, selections: Selections) -> list[StepBreakdown]:
        """Per-step selected options; steps with nothing recognized are left out."""
        return self._breakdown(self.catalog, selections)

    @staticmethod
    def _render_summary(breakdown: list[StepBreakdown]) -> str:
        blocks = []
        for section in breakdown:
            lines = "\n".join(f"  - {opt.name}" for opt in section.options)
            blocks.append(f"{section.step_title}:\n{lines}")
        return "\n\n".join(blocks)

    def format_summary(self, selections: Selections) -> str:
        """Human-readable summary, one block per step with a selection."""
        return self._render_summary(self.breakdown_by_step(selections))

    def quote(self, selections: Selections) -> Estimate:
        """
        Calculate a full estimate against a single catalog snapshot.

        Args:
            selections: step index → ordered option ids

        Returns:
            Estimate with total, subtotal, multiplier, breakdown and summary
        """
        catalog = self.catalog
        subtotal, multiplier = self._subtotal_and_multiplier(catalog, selections)
        breakdown = self._breakdown(catalog, selections)
        return Estimate(
            total=round_half_up(Decimal(subtotal) * multiplier),
            subtotal=subtotal,
            multiplier=multiplier,
            breakdown=breakdown,
            summary=self._render_summary(breakdown),
        )
