"""Report rendering tests — layout, numbering, answer formatting, contact block.

The golden test pins the exact byte layout; the remaining tests check one
behaviour each against the rendered lines.
"""

import pytest

from questionnaire_forms.errors import QuestionnaireNotFound
from questionnaire_forms.models.form import ContactData
from questionnaire_forms.renderer import (
    ReportRenderer,
    clean_username,
    contact_link,
    render_report,
)

from helpers.forms import contact, question, section

B = "═" * 40
D = "─" * 40

SECTIONS = [
    section("intro", question("name", "text", label="Имя"), title="Вступление"),
    section(
        "health",
        question(
            "operations", "radio", label="Операции",
            options=[("yes", "Да"), ("no", "Нет")], has_additional=True,
        ),
        title="Здоровье",
    ),
    section(
        "lifestyle",
        question("sleep", "number", label="Сон"),
        question(
            "activity", "checkbox", label="Активность",
            options=[("walking", "Ходьба"), ("yoga", "Йога")],
        ),
        question("complaints", "textarea", label="Жалобы"),
        title="Образ жизни",
    ),
]


def _render(form_data, additional=None, user=None, sections=SECTIONS, lang="ru", qtype="woman"):
    return render_report(
        qtype, sections, form_data, additional or {}, user or contact(), lang,
    )


def _lines(text):
    return text.split("\n")


# =====================================================================
# Golden layout
# =====================================================================


def test_full_report_layout():
    """The complete report matches the expected text byte for byte."""
    report = _render(
        {
            "name": "Анна",
            "operations": "yes",
            "sleep": "8",
            "activity": ["yoga", "walking"],
        },
        additional={"operations_additional": "аппендицит"},
        user=ContactData(method="telegram", username="@anna "),
    )
    expected = (
        f"\n{B}\n  АНКЕТА ЗДОРОВЬЯ ЖЕНЩИНЫ\n{B}\n\n"
        f"\n{D}\n📋 Вступление\n{D}\n\n"
        "**Имя**\n   Ответ: Анна\n\n"
        f"\n{D}\n📋 Здоровье\n{D}\n\n"
        "**Операции**\n   Ответ: Да\n   📝 Дополнительно: аппендицит\n\n"
        f"\n{D}\n📋 Образ жизни\n{D}\n\n"
        "1. **Сон**\n   Ответ: 8\n\n"
        "2. **Активность**\n   Ответ: Йога, Ходьба\n\n"
        f"\n{D}\n📞 КОНТАКТЫ\n{D}\n\n"
        "👤 Имя пользователя: @anna\n"
        "🔗 Ссылка: https://t.me/anna\n"
        f"\n{B}\n"
    )
    assert report == expected


def test_empty_sections_still_emit_headers():
    """Sections without answers keep their divider and title."""
    report = _render({})
    assert "📋 Вступление" in report
    assert "📋 Образ жизни" in report
    assert "**" not in report


# =====================================================================
# Numbering
# =====================================================================


class TestNumbering:

    def test_intro_health_lifestyle_scenario(self):
        """Intro unanswered, health answered, two lifestyle answers → only lifestyle numbered."""
        report = _render({"operations": "no", "sleep": "7", "complaints": "Усталость"})
        lines = _lines(report)
        assert "**Операции**" in lines
        assert "1. **Сон**" in lines
        assert "2. **Жалобы**" in lines
        assert not any(line.startswith("1. **Операции") for line in lines)

    def test_questions_before_health_never_numbered(self):
        report = _render({"name": "Анна", "sleep": "7"})
        assert "**Имя**" in _lines(report)
        assert "1. **Сон**" in _lines(report)

    def test_unanswered_questions_skip_numbers(self):
        """Numbers count rendered questions only."""
        report = _render({"complaints": "Усталость"})
        assert "1. **Жалобы**" in _lines(report)
        assert "**Сон**" not in report

    def test_counter_continues_across_sections(self):
        sections = SECTIONS + [
            section("goals", question("goal", "text", label="Цель"), title="Цели"),
        ]
        report = _render({"sleep": "7", "goal": "Бегать"}, sections=sections)
        assert "1. **Сон**" in _lines(report)
        assert "2. **Цель**" in _lines(report)

    def test_no_health_section_means_no_numbers(self):
        sections = [SECTIONS[0], SECTIONS[2]]
        report = _render({"name": "Анна", "sleep": "7"}, sections=sections)
        assert "**Сон**" in _lines(report)
        assert "1. " not in report

    def test_renderer_holds_no_state_between_calls(self):
        """Numbering restarts at 1 on every render."""
        renderer = ReportRenderer()
        args = ("woman", SECTIONS, {"sleep": "7"}, {}, contact(), "ru")
        first = renderer.render(*args)
        second = renderer.render(*args)
        assert "1. **Сон**" in _lines(second)
        assert first == second


# =====================================================================
# Answer formatting
# =====================================================================


class TestAnswers:

    def test_checkbox_keeps_selection_order(self):
        report = _render({"activity": ["walking", "yoga"]})
        assert "   Ответ: Ходьба, Йога" in _lines(report)

    def test_unknown_option_falls_back_to_raw_value(self):
        report = _render({"operations": "maybe", "activity": ["yoga", "swimming"]})
        lines = _lines(report)
        assert "   Ответ: maybe" in lines
        assert "   Ответ: Йога, swimming" in lines

    def test_free_text_verbatim(self):
        report = _render({"complaints": "  болит *голова*  "})
        assert "   Ответ:   болит *голова*  " in _lines(report)

    @pytest.mark.parametrize("value", ["", "   ", []])
    def test_empty_answers_not_rendered(self, value):
        report = _render({"complaints": value})
        assert "Жалобы" not in report

    def test_blank_additional_not_rendered(self):
        report = _render({"operations": "yes"}, additional={"operations_additional": "  "})
        assert "📝" not in report

    def test_additional_without_answer_not_rendered(self):
        report = _render({}, additional={"operations_additional": "текст"})
        assert "текст" not in report

    def test_english_labels(self):
        report = _render({"sleep": "7"}, lang="en", qtype="man")
        assert "  MAN HEALTH QUESTIONNAIRE" in _lines(report)
        assert "   Answer: 7" in _lines(report)
        assert "📞 CONTACTS" in report


# =====================================================================
# Contact block
# =====================================================================


class TestContact:

    @pytest.mark.parametrize("raw, clean", [
        ("anna", "anna"),
        ("@anna", "anna"),
        ("  anna  ", "anna"),
        ("@@anna", "@anna"),
        (" @anna", "@anna"),
    ])
    def test_clean_username(self, raw, clean):
        """Only a single leading "@" is stripped, before trimming."""
        assert clean_username(raw) == clean

    def test_telegram_link(self):
        assert contact_link(ContactData(method="telegram", username="@anna")) == "https://t.me/anna"

    def test_instagram_link(self):
        report = _render({}, user=ContactData(method="instagram", username="anna.k"))
        lines = _lines(report)
        assert "👤 Имя пользователя: @anna.k" in lines
        assert "🔗 Ссылка: https://instagram.com/anna.k" in lines


def test_render_is_deterministic():
    """Identical inputs produce byte-identical output."""
    form = {"name": "Анна", "operations": "yes", "activity": ["yoga"]}
    additional = {"operations_additional": "x"}
    assert _render(form, additional) == _render(form, additional)


def test_unknown_questionnaire_type():
    """An unknown type fails with an error naming it, not an attribute lookup."""
    with pytest.raises(QuestionnaireNotFound, match="elder"):
        _render({}, qtype="elder")
