"""
Centralized Blueprint Registration
All blueprints MUST be registered inside register_all_blueprints(app)
"""


def register_all_blueprints(app):

    # Suppliers & purchases
    from farmledger.routes.farmer_routes import farmers_bp
    from farmledger.routes.purchase_routes import purchases_bp
    app.register_blueprint(farmers_bp)
    app.register_blueprint(purchases_bp)

    # Catalog & stock
    from farmledger.routes.pricing_routes import pricing_bp
    from farmledger.routes.inventory_routes import inventory_bp
    app.register_blueprint(pricing_bp)
    app.register_blueprint(inventory_bp)

    # Sales & money
    from farmledger.routes.order_routes import orders_bp
    from farmledger.routes.finance_routes import finance_bp
    from farmledger.routes.forecast_routes import forecast_bp
    app.register_blueprint(orders_bp)
    app.register_blueprint(finance_bp)
    app.register_blueprint(forecast_bp)

    # Dashboard
    from farmledger.routes.dashboard_routes import dashboard_bp
    app.register_blueprint(dashboard_bp)

    print("✓ All blueprints registered")
