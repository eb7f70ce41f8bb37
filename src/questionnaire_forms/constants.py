"""Questionnaire constants shared across the SDK.

These values are referenced by the draft store, validator, renderer, and
submitter.  They mirror conventions encoded in the YAML files under ``v1/``
and the storage layout used by the browser client.

A few constants can be overridden via environment variables so that
deployments can adjust them without code changes.
"""

import os

# Supported questionnaire variants.  Each one has its own schema file
# under ``v1/questionnaires/<type>.yaml`` and its own report banner.
QUESTIONNAIRE_TYPES: tuple[str, ...] = ("infant", "child", "woman", "man")

# Draft storage key prefix; the full key is ``<prefix>_<type>_<lang>``.
STORAGE_KEY_PREFIX = "health_questionnaire"

# Drafts older than this are expired and never restored.
# Overridable via DRAFT_TTL_HOURS env var.
DRAFT_TTL_HOURS = int(os.getenv("DRAFT_TTL_HOURS", "24"))
DRAFT_TTL_MS = DRAFT_TTL_HOURS * 60 * 60 * 1000

# Language used when the requested one has no message table entry.
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "ru")

# Section id after which report questions start being numbered.
NUMBERING_SECTION_ID = "health"

# Suffix appended to a question id to form its elaboration-text key.
ADDITIONAL_SUFFIX = "_additional"

# Error map key for the contact username field.
CONTACT_USERNAME_KEY = "contact_username"

# Profile URL hosts per contact method.
CONTACT_LINK_BASES: dict[str, str] = {
    "telegram": "https://t.me/",
    "instagram": "https://instagram.com/",
}

# Report banner/divider widths.
BANNER_CHAR = "═"
DIVIDER_CHAR = "─"
RULE_WIDTH = 40

# Placeholders used when the bot credentials are not configured.
TOKEN_PLACEHOLDER = "<TELEGRAM_BOT_TOKEN>"
CHAT_ID_PLACEHOLDER = "<TELEGRAM_CHAT_ID>"

# Client-side bound on the sendMessage call.
SUBMIT_TIMEOUT_SECONDS = 30.0
