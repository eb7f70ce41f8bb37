"""Schema endpoints — questionnaire definitions for the browser client.

Read-only; the data comes from ``v1/questionnaires/`` YAML files loaded
at startup.
"""

from fastapi import APIRouter, Depends

from questionnaire_forms.models.rule import TriggerRule
from questionnaire_forms.models.schema import Section
from questionnaire_forms.schema_store import SchemaStore

from questionnaire_server.dependencies import get_store

router = APIRouter(prefix="/questionnaires", tags=["questionnaires"])


@router.get("")
def list_questionnaires(
    store: SchemaStore = Depends(get_store),
) -> list[str]:
    """Return the available questionnaire types."""
    return list(store.sections)


@router.get("/{questionnaire_type}")
def get_questionnaire(
    questionnaire_type: str,
    store: SchemaStore = Depends(get_store),
) -> dict:
    """Return sections and trigger rules for one questionnaire type.

    Raises 404 for an unknown type.
    """
    sections: list[Section] = store.get_sections(questionnaire_type)
    rules: list[TriggerRule] = store.get_rules(questionnaire_type)
    return {
        "type": questionnaire_type,
        "sections": [s.model_dump() for s in sections],
        "rules": [r.model_dump() for r in rules],
    }
