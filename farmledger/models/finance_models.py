# farmledger/models/finance_models.py
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

TaxMethod = Literal["standard", "progressive"]
FinancialStatus = Literal["Loss", "Break-even", "Profit"]


class FinancialAnalysis(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    income: float = 0
    expense: float = 0
    taxableIncome: float = 0
    taxMethod: TaxMethod = "standard"
    taxRatePercent: float = 10
    minimumThreshold: float = 1000
    tax: float = 0
    effectiveRate: float = 0
    status: FinancialStatus = "Break-even"


class Deductions(BaseModel):
    operational: float = 0
    inventory: float = 0
    capital: float = 0
    total: float = 0


class RevenueSummary(BaseModel):
    totalRevenue: float = 0
    byCategory: Dict[str, float] = Field(default_factory=dict)


class RemainingStock(BaseModel):
    category: str
    units: int = 0
    totalKg: float = 0


class ComprehensiveReport(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    totalIncome: float = 0
    totalExpenses: float = 0
    taxApplied: float = 0
    netProfit: float = 0
    unitsSoldPerCategory: Dict[str, int] = Field(default_factory=dict)
    remainingPackagedStockPerCategory: List[RemainingStock] = Field(default_factory=list)
