"""
fruitlink.directory — in-memory search, facet filtering and distributions.

Modules:
  filters   — SupplierFilters / BuyerFilters and the filter functions.
  analytics — Country, fruit-interest and certification distributions.
"""
