# farmledger/services/report_service.py

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from farmledger.errors import FieldErrors, NotFoundError
from farmledger.models.finance_models import ComprehensiveReport, RemainingStock
from farmledger.services.base import LedgerService
from farmledger.services.form_utils import clean, in_range, parse_date

logger = logging.getLogger(__name__)

REPORT_TAX_RATE = 0.10


class ReportService(LedgerService):
    """
    Income, expenses, flat 10% tax and stock position for a date range.
    The last generated report is kept as parameter/value rows for CSV export.
    """

    def __init__(self, store, hub=None, today=None):
        super().__init__(store, hub, today)
        self._last_params: Optional[Tuple[str, str]] = None
        self._last_report: Optional[ComprehensiveReport] = None
        self._last_rows: List[Dict[str, Any]] = []

    def generate(self, start: Any = None, end: Any = None) -> ComprehensiveReport:
        start_raw, end_raw = clean(start), clean(end)

        errs = FieldErrors()
        if start_raw and parse_date(start_raw) is None:
            errs.add("Start date must be a valid date (YYYY-MM-DD).")
        if end_raw and parse_date(end_raw) is None:
            errs.add("End date must be a valid date (YYYY-MM-DD).")
        errs.raise_if_any()

        start_d, end_d = parse_date(start_raw), parse_date(end_raw)

        total_income = 0.0
        sold: Dict[str, int] = {}
        for o in self.store.orders:
            if not in_range(parse_date(o.date), start_d, end_d):
                continue
            total_income += o.totalPrice
            sold[o.category] = sold.get(o.category, 0) + o.quantity

        total_expenses = sum(
            p.totalCost for p in self.store.purchases
            if in_range(parse_date(p.date), start_d, end_d)
        )

        tax = total_income * REPORT_TAX_RATE
        remaining = [
            RemainingStock(category=p.category, units=p.units, totalKg=p.totalKg)
            for p in self.store.packaged_inventory
        ]

        report = ComprehensiveReport(
            startDate=start_raw or None,
            endDate=end_raw or None,
            totalIncome=total_income,
            totalExpenses=total_expenses,
            taxApplied=tax,
            netProfit=total_income - total_expenses - tax,
            unitsSoldPerCategory=sold,
            remainingPackagedStockPerCategory=remaining,
        )

        self._last_params = (start_raw, end_raw)
        self._last_report = report
        self._last_rows = self._rows(report)
        logger.info("Report generated for %s..%s", start_raw or "N/A", end_raw or "N/A")
        return report

    def refresh(self) -> Optional[ComprehensiveReport]:
        """Regenerate with the last range; no-op until a report exists."""
        if self._last_params is None:
            return None
        return self.generate(*self._last_params)

    @property
    def last_report(self) -> Optional[ComprehensiveReport]:
        return self._last_report

    def last_report_rows(self) -> List[Dict[str, Any]]:
        if not self._last_rows:
            raise NotFoundError("No report generated yet!")
        return list(self._last_rows)

    @staticmethod
    def _rows(report: ComprehensiveReport) -> List[Dict[str, Any]]:
        remaining = [r.model_dump() for r in report.remainingPackagedStockPerCategory]
        return [
            {"parameter": "Start Date", "value": report.startDate or ""},
            {"parameter": "End Date", "value": report.endDate or ""},
            {"parameter": "Total Income", "value": f"{report.totalIncome:.2f}"},
            {"parameter": "Total Expenses", "value": f"{report.totalExpenses:.2f}"},
            {"parameter": "Tax Applied", "value": f"{report.taxApplied:.2f}"},
            {"parameter": "Net Profit", "value": f"{report.netProfit:.2f}"},
            {
                "parameter": "Products Sold (per category)",
                "value": json.dumps(report.unitsSoldPerCategory, separators=(",", ":")),
            },
            {
                "parameter": "Remaining Stock (per category)",
                "value": json.dumps(remaining, separators=(",", ":")),
            },
        ]
