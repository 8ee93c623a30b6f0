"""
Step-by-Step Walkthrough

Reveals the already-computed calculation steps one at a time. The reveal is
an index into a fixed list of steps: advancing it changes which prefix is
shown and never recomputes or modifies the steps.

Usage:
    from vitoptics.analysis import calculate_accesses_detailed
    from vitoptics.reporting.walkthrough import StepReveal, run_walkthrough

    calc = calculate_accesses_detailed(vit)
    reveal = StepReveal(calc.steps)
    while not reveal.finished:
        reveal.advance()

    # Timed reveal on the console
    run_walkthrough(calc, interval_s=1.5)
"""

import time
from typing import Callable, Optional, Sequence, Tuple

from vitoptics.core.structures import CalculationStep, DetailedCalculation, format_quantity


# Delay between revealed steps (seconds)
DEFAULT_INTERVAL_S = 1.5


class StepReveal:
    """Monotonically increasing reveal index over a precomputed step list."""

    def __init__(self, steps: Sequence[CalculationStep]):
        self._steps: Tuple[CalculationStep, ...] = tuple(steps)
        self._index = 0

    @property
    def index(self) -> int:
        """Index of the most recently revealed step."""
        return self._index

    @property
    def steps(self) -> Tuple[CalculationStep, ...]:
        return self._steps

    @property
    def current(self) -> Optional[CalculationStep]:
        return self._steps[self._index] if self._steps else None

    @property
    def visible_steps(self) -> Tuple[CalculationStep, ...]:
        """Steps revealed so far (always a prefix of the full list)."""
        return self._steps[:self._index + 1] if self._steps else ()

    @property
    def finished(self) -> bool:
        return self._index >= len(self._steps) - 1

    def advance(self) -> bool:
        """
        Reveal the next step.

        Returns:
            True if a new step was revealed, False once all steps are visible
        """
        if self.finished:
            return False
        self._index += 1
        return True

    def reset(self) -> None:
        """Start again from the first step."""
        self._index = 0


def format_step(step: CalculationStep, index: int) -> str:
    """Multi-line console rendering of one step."""
    lines = []
    lines.append(f"  Step {index + 1}: {step.name}")
    lines.append(f"    Formula:  {step.formula}")
    for narrative_line in step.narrative.split("\n"):
        lines.append(f"    {narrative_line}")
    lines.append(f"    Accesses: {format_quantity(step.access_count)}")
    lines.append(f"    {step.description}")
    return "\n".join(lines)


def run_walkthrough(
    calculation: DetailedCalculation,
    interval_s: float = DEFAULT_INTERVAL_S,
    printer: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> StepReveal:
    """
    Print each step in turn, pausing between reveals.

    Args:
        calculation: Precomputed calculation to walk through
        interval_s: Delay between steps (0 disables the pause)
        printer: Output function
        sleep: Delay function

    Returns:
        The finished StepReveal
    """
    reveal = StepReveal(calculation.steps)
    if not reveal.steps:
        return reveal

    printer(format_step(reveal.current, reveal.index))
    while reveal.advance():
        if interval_s > 0:
            sleep(interval_s)
        printer("")
        printer(format_step(reveal.current, reveal.index))

    return reveal
