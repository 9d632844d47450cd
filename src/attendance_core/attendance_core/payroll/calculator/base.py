from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollInputs, PayrollSummary


class PayrollCalculator(ABC):
    """Strategy Pattern: turns one employee's window into a payroll summary."""

    @abstractmethod
    def compute(self, inputs: PayrollInputs) -> PayrollSummary:
        raise NotImplementedError
