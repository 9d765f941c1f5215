"""
fruitlink.chat — natural-language entity creation and conversation.

Modules:
  prompts    — Extraction prompt templates.
  extraction — JSON and regex extraction of supplier/buyer drafts.
  router     — ``ChatRouter``: message → ``ChatReply``; never raises.
  session    — ``ChatSession``: message log, entity creation, navigation.
"""
