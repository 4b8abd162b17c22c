# farmledger/routes/finance_routes.py

from flask import Blueprint, jsonify, request

from farmledger.routes.helpers import csv_response, form_data, get_ledger

finance_bp = Blueprint("finance", __name__, url_prefix="/finance")


@finance_bp.get("/analysis")
def analysis():
    args = request.args
    result = get_ledger().finance.analyze(
        start=args.get("start"),
        end=args.get("end"),
        tax_method=args.get("taxMethod", "standard"),
        tax_rate_percent=args.get("taxRate", ""),
        minimum_threshold=args.get("minimumThreshold", ""),
    )
    return jsonify({"ok": True, "analysis": result.model_dump()})


@finance_bp.get("/deductions")
def deductions():
    return jsonify({"ok": True, "deductions": get_ledger().finance.deductions().model_dump()})


@finance_bp.get("/revenue")
def revenue():
    ledger = get_ledger()
    return jsonify({
        "ok": True,
        "revenue": ledger.orders.revenue_summary().model_dump(),
        "currentMonth": ledger.orders.current_month_revenue(),
    })


@finance_bp.get("/expenses")
def expenses():
    args = request.args
    total = get_ledger().finance.expense_for_period(args.get("start"), args.get("end"))
    return jsonify({"ok": True, "expenses": total})


# ----------------------------------------------------
# COMPREHENSIVE REPORT
# ----------------------------------------------------
@finance_bp.post("/report")
def generate_report():
    data = form_data()
    report = get_ledger().reports.generate(data.get("start"), data.get("end"))
    return jsonify({"ok": True, "report": report.model_dump()})


@finance_bp.get("/report/export")
def export_report():
    return csv_response(get_ledger().exports.report_csv(), "comprehensive_report.csv")
