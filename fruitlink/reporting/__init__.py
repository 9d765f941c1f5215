"""
fruitlink.reporting — plain-text rendering for the CLI.

Modules:
  formatters — ASCII tables and cards for entities, matches, forecasts and
               directory insights.
"""
