"""
Expense drafting for the task completion form.

``ExpenseSheet`` holds the rows an engineer is typing and refuses any amount
edit that would push the running total over the allocated budget.
``compute_ledger`` derives allocated / used / remaining from the current rows
and is meant to be called after every change; nothing is cached.
"""
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from grams.resource_requests.domain.amounts import parse_amount
from grams.resource_requests.domain.errors import InvalidRequest
from grams.tasks.domain.models import ExpenseLine

EDITABLE_FIELDS = ("description", "amount")


@dataclass(frozen=True)
class ExpenseEntry:
    id: int
    description: str = ""
    amount: object = ""

    @property
    def value(self) -> float:
        return parse_amount(self.amount)

    @property
    def is_filled(self) -> bool:
        return bool(self.description.strip()) and self.amount not in ("", None)


@dataclass(frozen=True)
class BudgetLedger:
    allocated_budget: float
    total_used: float
    remaining_budget: Optional[float]
    is_over_budget: bool

    @property
    def has_allocation(self) -> bool:
        return self.allocated_budget > 0


def total_used(entries: Sequence[ExpenseEntry]) -> float:
    return sum(entry.value for entry in entries)


def compute_ledger(allocated_budget: float, entries: Sequence[ExpenseEntry]) -> BudgetLedger:
    used = total_used(entries)
    allocated = allocated_budget or 0.0
    if allocated <= 0:
        # No allocation yet: remaining/over-budget have no meaning.
        return BudgetLedger(
            allocated_budget=0.0,
            total_used=used,
            remaining_budget=None,
            is_over_budget=False,
        )
    return BudgetLedger(
        allocated_budget=allocated,
        total_used=used,
        remaining_budget=allocated - used,
        is_over_budget=used > allocated,
    )


class ExpenseSheet:
    def __init__(self, allocated_budget: float) -> None:
        self.allocated_budget = allocated_budget or 0.0
        self._entries: List[ExpenseEntry] = [ExpenseEntry(id=1)]

    @property
    def entries(self) -> List[ExpenseEntry]:
        return list(self._entries)

    @property
    def ledger(self) -> BudgetLedger:
        return compute_ledger(self.allocated_budget, self._entries)

    def reset(self) -> None:
        self._entries = [ExpenseEntry(id=1)]

    def add(self) -> ExpenseEntry:
        entry = ExpenseEntry(id=max((e.id for e in self._entries), default=0) + 1)
        self._entries.append(entry)
        return entry

    def remove(self, entry_id: int) -> None:
        if len(self._entries) <= 1:
            raise InvalidRequest("At least one expense item is required")
        self._entries = [e for e in self._entries if e.id != entry_id]

    def update(self, entry_id: int, field: str, value: object) -> ExpenseEntry:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown expense field: {field}")
        current = self._get(entry_id)

        if field == "amount" and value not in ("", None):
            amount = parse_amount(value)
            if amount < 0:
                raise InvalidRequest("Expense amount cannot be negative")
            if amount > 0:
                others = total_used([e for e in self._entries if e.id != entry_id])
                running = others + amount
                if running > self.allocated_budget:
                    raise InvalidRequest(
                        f"Total expenses (₹{running:,.2f}) cannot exceed "
                        f"allocated budget (₹{self.allocated_budget:,.2f})"
                    )

        updated = replace(current, **{field: value})
        self._entries = [updated if e.id == entry_id else e for e in self._entries]
        return updated

    def filled_lines(self) -> List[ExpenseLine]:
        return [
            ExpenseLine(description=e.description, amount=e.value)
            for e in self._entries
            if e.is_filled
        ]

    def _get(self, entry_id: int) -> ExpenseEntry:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise InvalidRequest(f"Expense item {entry_id} not found")
