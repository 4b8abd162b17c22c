# farmledger/services/finance_service.py

from typing import Any, List, Tuple

from farmledger.errors import FieldErrors
from farmledger.models.finance_models import Deductions, FinancialAnalysis
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import clean, in_range, parse_date, to_float

# (upper bound of bracket, rate); each rate applies only to the slice inside its bracket
PROGRESSIVE_BRACKETS: List[Tuple[float, float]] = [
    (5000, 0.05),
    (10000, 0.10),
    (20000, 0.15),
    (float("inf"), 0.20),
]

MAX_OPERATIONAL_DEDUCTION = 50000
INVENTORY_DEPRECIATION_RATE = 0.10

DEFAULT_TAX_RATE_PERCENT = 10.0
DEFAULT_MINIMUM_THRESHOLD = 1000.0


def progressive_tax(income: float) -> float:
    total = 0.0
    remaining = income
    previous = 0.0
    for threshold, rate in PROGRESSIVE_BRACKETS:
        in_bracket = min(remaining, threshold - previous)
        if in_bracket <= 0:
            break
        total += in_bracket * rate
        remaining -= in_bracket
        previous = threshold
    return total


def financial_status(taxable_income: float) -> str:
    if taxable_income < 0:
        return "Loss"
    if taxable_income == 0:
        return "Break-even"
    return "Profit"


class FinanceService(LedgerService):

    def income_for_period(self, start=None, end=None) -> float:
        start_d, end_d = parse_date(start), parse_date(end)
        return sum(
            o.totalPrice for o in self.store.orders
            if in_range(parse_date(o.date), start_d, end_d)
        )

    def expense_for_period(self, start=None, end=None) -> float:
        start_d, end_d = parse_date(start), parse_date(end)
        return sum(
            p.totalCost for p in self.store.purchases
            if in_range(parse_date(p.date), start_d, end_d)
        )

    def analyze(
        self,
        start: Any = None,
        end: Any = None,
        tax_method: Any = "standard",
        tax_rate_percent: Any = DEFAULT_TAX_RATE_PERCENT,
        minimum_threshold: Any = DEFAULT_MINIMUM_THRESHOLD,
    ) -> FinancialAnalysis:
        method = clean(tax_method).lower() or "standard"
        rate = to_float(tax_rate_percent) if clean(tax_rate_percent) else DEFAULT_TAX_RATE_PERCENT
        threshold = to_float(minimum_threshold) if clean(minimum_threshold) else DEFAULT_MINIMUM_THRESHOLD

        errs = FieldErrors()
        if method not in ("standard", "progressive"):
            errs.add("Tax method must be 'standard' or 'progressive'.")
        if rate is None or rate < 0 or rate > 100:
            errs.add("Tax rate must be between 0 and 100.")
        if threshold is None:
            errs.add("Minimum threshold must be a number.")
        if clean(start) and parse_date(start) is None:
            errs.add("Start date must be a valid date (YYYY-MM-DD).")
        if clean(end) and parse_date(end) is None:
            errs.add("End date must be a valid date (YYYY-MM-DD).")
        errs.raise_if_any()

        income = self.income_for_period(start, end)
        expense = self.expense_for_period(start, end)
        taxable = income - expense

        tax = 0.0
        if taxable > threshold:
            if method == "progressive":
                tax = progressive_tax(taxable)
            else:
                tax = taxable * rate / 100

        effective = (tax / taxable * 100) if taxable > 0 else 0.0

        return FinancialAnalysis(
            startDate=clean(start) or None,
            endDate=clean(end) or None,
            income=income,
            expense=expense,
            taxableIncome=taxable,
            taxMethod=method,
            taxRatePercent=rate,
            minimumThreshold=threshold,
            tax=tax,
            effectiveRate=effective,
            status=financial_status(taxable),
        )

    # -------------------------------------------------
    # DEDUCTIONS
    # -------------------------------------------------
    def operational_deductions(self) -> float:
        total = sum(p.totalCost for p in self.store.purchases)
        return min(total, MAX_OPERATIONAL_DEDUCTION)

    def inventory_depreciation(self) -> float:
        return sum(i.quantity * INVENTORY_DEPRECIATION_RATE for i in self.store.inventory_items)

    def capital_deductions(self) -> float:
        return 0.0

    def deductions(self) -> Deductions:
        operational = self.operational_deductions()
        inventory = self.inventory_depreciation()
        capital = self.capital_deductions()
        return Deductions(
            operational=operational,
            inventory=inventory,
            capital=capital,
            total=operational + inventory + capital,
        )
