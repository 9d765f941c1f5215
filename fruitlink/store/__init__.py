"""
fruitlink.store — process-wide in-memory session state.

Modules:
  seed      — Demo suppliers/buyers and the pick-list vocabularies.
  scheduler — Delayed callbacks with cancellation (post-chat navigation).
  state     — ``AppState``: collections, chat log, current view.
"""
