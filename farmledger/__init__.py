"""Farm produce ledger: purchases, raw and packaged stock, orders, finance."""
