"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
Catalog types are frozen so a loaded catalog can be shared between
requests and swapped as a whole, never edited in place.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Option:
    """A selectable line item within a step."""
    id: str
    name: str
    base_price: int
    description: str = ""
    multiplier: Optional[Decimal] = None  # timeline options only


@dataclass(frozen=True)
class Step:
    """One stage of the pricing questionnaire."""
    id: int
    title: str
    description: str = ""
    multi_select: bool = False
    is_timeline: bool = False
    options: tuple[Option, ...] = ()

    def find_option(self, option_id) -> Optional[Option]:
        """Look up an option by identifier, None if the step has no such option."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None


@dataclass(frozen=True)
class Catalog:
    """Ordered, immutable set of pricing steps.

    Steps are addressed by zero-based position. ``Step.id`` is a display
    identifier only and is never used for lookups.
    """
    steps: tuple[Step, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def step_at(self, index) -> Optional[Step]:
        """Return the step at a position, None for anything out of range."""
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    @property
    def timeline_index(self) -> Optional[int]:
        for index, step in enumerate(self.steps):
            if step.is_timeline:
                return index
        return None

    @property
    def option_count(self) -> int:
        return sum(len(step.options) for step in self.steps)


@dataclass
class SelectedOption:
    """A recognized selection as shown in a breakdown."""
    name: str
    price: int
    description: str


@dataclass
class StepBreakdown:
    """Selected options of one step and their nominal subtotal."""
    step_title: str
    options: list[SelectedOption] = field(default_factory=list)
    total: int = 0


@dataclass
class Estimate:
    """Complete result of a pricing calculation."""
    total: int
    subtotal: int
    multiplier: Decimal
    breakdown: list[StepBreakdown] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict (camelCase keys like the site expects)."""
        return {
            "total": self.total,
            "subtotal": self.subtotal,
            "multiplier": float(self.multiplier),
            "breakdown": [
                {
                    "stepTitle": step.step_title,
                    "options": [
                        {"name": opt.name, "price": opt.price, "description": opt.description}
                        for opt in step.options
                    ],
                    "total": step.total,
                }
                for step in self.breakdown
            ],
            "summary": self.summary,
        }
