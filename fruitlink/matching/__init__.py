"""
fruitlink.matching — buyer/supplier matching by shared fruit.

Modules:
  matcher — match_suppliers / match_buyers / shared_fruits / build_trade_links.
  risk    — Buyer-side trade risk from matched-supplier reliability.
"""
