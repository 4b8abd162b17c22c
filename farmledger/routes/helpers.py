# farmledger/routes/helpers.py

from typing import Any, Dict

from flask import Response, current_app, request

LEDGER_EXTENSION = "farm_ledger"


def get_ledger():
    """The FarmLedger created by create_app()."""
    return current_app.extensions[LEDGER_EXTENSION]


def form_data() -> Dict[str, Any]:
    """JSON body if present, else submitted form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def dump(items):
    return [i.model_dump() for i in items]


def csv_response(output: str, filename: str) -> Response:
    return Response(
        output,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )
