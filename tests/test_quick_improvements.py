"""Tests for config/quick_improvements.py and config/prompts/worksheet_edit.py."""

from config.prompts.worksheet_edit import (
    BASE64_PLACEHOLDER,
    build_component_edit_prompt,
    build_page_edit_prompt,
)
from config.quick_improvements import (
    DEFAULT_COMPONENT_IMPROVEMENTS,
    PAGE_QUICK_IMPROVEMENTS,
    get_instruction_placeholder,
    get_quick_improvements,
)
from models.edit import EditTarget


# ── Quick improvements ────────────────────────────────────────


def test_component_specific_improvements():
    actions = get_quick_improvements(EditTarget.COMPONENT, "tap-image")
    assert [a.id for a in actions] == ["bigger", "caption", "animation"]
    assert actions[0].instruction == "Change the size to large"


def test_fallback_improvements_for_other_components():
    assert get_quick_improvements(EditTarget.COMPONENT, "voice-recorder") == DEFAULT_COMPONENT_IMPROVEMENTS
    assert get_quick_improvements(EditTarget.COMPONENT) == DEFAULT_COMPONENT_IMPROVEMENTS


def test_page_improvements_ignore_component_type():
    assert get_quick_improvements(EditTarget.PAGE, "tap-image") == PAGE_QUICK_IMPROVEMENTS


def test_returned_list_is_a_copy():
    actions = get_quick_improvements(EditTarget.PAGE)
    actions.clear()
    assert len(get_quick_improvements(EditTarget.PAGE)) == 4


def test_instruction_placeholder():
    assert "bigger" in get_instruction_placeholder(EditTarget.COMPONENT, "tap-image")
    assert get_instruction_placeholder(EditTarget.COMPONENT, "unknown") == "What should change?"
    assert "page" in get_instruction_placeholder(EditTarget.PAGE)


# ── Prompt builders ───────────────────────────────────────────


def test_component_prompt_renders_json_and_rules(edit_context):
    prompt = build_component_edit_prompt(
        component_type="simple-counter",
        component_data={"properties": {"title": "Ducks"}},
        instruction="Add more ducks",
        context=edit_context,
    )
    assert '"title": "Ducks"' in prompt
    assert "Keep content age-appropriate for 3-5" in prompt
    assert "(No schema registered for this component.)" in prompt
    assert BASE64_PLACEHOLDER in prompt
    assert '"patch": {' in prompt  # doubled braces rendered


def test_page_prompt_keeps_unicode(edit_context):
    prompt = build_page_edit_prompt(
        page_data={"title": "Тварини"},
        instruction="Спростити",
        context=edit_context,
    )
    assert "Тварини" in prompt
    assert "**USER INSTRUCTION:** Спростити" in prompt
    assert '"element-{timestamp}-{random}"' in prompt
