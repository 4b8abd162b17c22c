from conftest import NORTH_FARMER

PURCHASE = {
    "purchaseId": "P1",
    "farmerId": "F1",
    "date": "2024-06-01",
    "quantity": 100,
    "pricePerKg": 2,
}

ORDER = {
    "orderId": "O1",
    "customerName": "Meera Shah",
    "customerContact": "9876543210",
    "category": "Medium (250g)",
    "quantity": 10,
    "date": "2024-06-10",
}


def _seed(client):
    assert client.post("/farmers/", json=NORTH_FARMER).status_code == 201
    assert client.post("/purchases/", json=PURCHASE).status_code == 201
    r = client.post("/inventory/packaging", json={
        "rawCategory": "North",
        "packagedCategory": "Medium (250g)",
        "quantity": 50,
    })
    assert r.status_code == 200
    return r.get_json()


def test_full_flow(client):
    result = _seed(client)
    assert result["result"]["unitsAdded"] == 200

    r = client.post("/orders/", json=ORDER)
    assert r.status_code == 201
    assert r.get_json()["order"]["totalPrice"] == 100

    packaged = client.get("/inventory/packaged").get_json()
    units = {i["category"]: i["units"] for i in packaged["items"]}
    assert units["Medium (250g)"] == 190

    raw = client.get("/inventory/raw").get_json()["items"]
    assert raw[0]["category"] == "North"
    assert raw[0]["quantity"] == 50
    assert raw[0]["lowStock"] is False


def test_new_farmer_region_gets_raw_item(client):
    client.post("/farmers/", json=NORTH_FARMER)
    raw = client.get("/inventory/raw").get_json()["items"]
    assert [(i["category"], i["quantity"]) for i in raw] == [("North", 0)]


def test_errors_are_json(client):
    _seed(client)

    r = client.post("/orders/", json={**ORDER, "quantity": 1000})
    body = r.get_json()
    assert r.status_code == 409
    assert body["ok"] is False
    assert body["errors"]

    r = client.post("/purchases/", json=PURCHASE)
    assert r.status_code == 409

    r = client.get("/farmers/NOPE")
    assert r.status_code == 404

    r = client.post("/pricing/", json={"category": "X", "weightInfo": "lots", "price": 1})
    assert r.status_code == 400
    assert r.get_json()["errors"] == ["Weight Info must be a valid format (e.g., '0.5 kg') or 'Varies'."]


def test_csv_exports(client):
    _seed(client)
    client.post("/orders/", json=ORDER)

    r = client.get("/orders/export")
    assert r.mimetype == "text/csv"
    assert "attachment; filename=orders.csv" in r.headers["Content-Disposition"]
    assert r.get_data(as_text=True).startswith("orderId,customerName,")

    assert client.get("/farmers/export").status_code == 200
    assert client.get("/purchases/export").status_code == 200
    assert client.get("/inventory/raw/export").status_code == 200


def test_report_endpoints(client):
    assert client.get("/finance/report/export").status_code == 404

    _seed(client)
    r = client.post("/finance/report", json={"start": "", "end": ""})
    assert r.get_json()["report"]["totalExpenses"] == 200

    r = client.get("/finance/report/export")
    assert r.status_code == 200
    assert r.get_data(as_text=True).startswith("parameter,value\n")


def test_finance_endpoints(client):
    _seed(client)
    client.post("/orders/", json=ORDER)

    a = client.get("/finance/analysis?taxMethod=progressive").get_json()["analysis"]
    assert a["taxableIncome"] == -100
    assert a["status"] == "Loss"

    assert client.get("/finance/deductions").get_json()["deductions"]["operational"] == 200
    assert client.get("/finance/revenue").get_json()["currentMonth"] == 100
    assert client.get("/finance/expenses?start=2024-06-02").get_json()["expenses"] == 0


def test_forecast_endpoints(client):
    _seed(client)
    client.post("/orders/", json=ORDER)

    forecasts = client.get("/forecast/").get_json()["forecasts"]
    assert len(forecasts) == 7

    recs = client.get("/forecast/demand").get_json()["recommendations"]
    assert recs[0]["category"] == "Medium (250g)"

    assert client.get("/forecast/Medium%20(250g)").status_code == 200
    assert client.get("/forecast/Nope").status_code == 404


def test_dashboard_endpoints(client):
    _seed(client)

    stats = client.get("/dashboard/stats").get_json()["stats"]
    assert stats["suppliers"] == 1
    assert stats["refreshSeconds"] == 30

    alerts = client.get("/dashboard/alerts").get_json()["alerts"]
    assert {"type", "severity", "message"} <= set(alerts[0])

    assert client.get("/dashboard/charts").status_code == 200
    assert client.get("/dashboard/activity").get_json()["activity"] == []

    assert client.post("/dashboard/reset").status_code == 200
    assert client.get("/dashboard/stats").get_json()["stats"]["suppliers"] == 0


def test_reorder_level_endpoint(client):
    r = client.put("/inventory/reorder-levels/Medium%20(250g)", json={"reorderLevel": 25})
    assert r.get_json()["reorderLevel"] == 25
    assert client.get("/inventory/reorder-levels").get_json()["reorderLevels"]["Medium (250g)"] == 25

    r = client.put("/inventory/reorder-levels/Medium%20(250g)", json={"reorderLevel": 0})
    assert r.status_code == 400


def test_order_status_and_delete(client):
    _seed(client)
    client.post("/orders/", json=ORDER)

    r = client.patch("/orders/O1/status", json={"status": "Delivered"})
    assert r.get_json()["order"]["status"] == "Delivered"

    assert client.delete("/orders/O1").status_code == 200
    assert client.get("/orders/O1").status_code == 404
