"""questionnaire_server — FastAPI REST API for the questionnaire SDK.

Exposes the FormPipeline over HTTP so the browser client can fetch
schemas, save and restore drafts, validate, and submit questionnaires.
"""
