"""Worksheet edit prompts — turn an instruction into a JSON patch.

Two variants:
- component: returns ONLY the changed properties of one element
- page: returns the optional new title and the COMPLETE elements list
"""

from __future__ import annotations

import json
from typing import Any

from models.edit import WorksheetEditContext

BASE64_PLACEHOLDER = "[BASE64_IMAGE_DATA_OMITTED]"

COMPONENT_EDIT_PROMPT = """\
You are a worksheet editor AI assistant. Your task is to edit a worksheet
component based on the user's instruction.

**COMPONENT TYPE:** {component_type}
**CURRENT DATA:**
```json
{component_data}
```

**USER INSTRUCTION:** {instruction}

**WORKSHEET CONTEXT:**
- Topic: {topic}
- Age Group: {age_group}
- Difficulty: {difficulty}
- Content Language: {language}

{schema_info}

**IMPORTANT RULES:**
1. Return ONLY the changed fields in the "patch" object
2. Keep content age-appropriate for {age_group}
3. Maintain educational value and clarity
4. Preserve the component structure and type
5. Ensure properties match the component schema (types, allowed values, ranges)
6. For text fields, use {language} language
7. Be concise and focused on the specific instruction
8. DO NOT return any field whose value is {placeholder} - it is preserved automatically

**RETURN FORMAT - JSON ONLY (no markdown, no code blocks):**
{{
  "patch": {{
    "properties": {{ "<changed property>": "<new value>" }}
  }},
  "changes": [
    {{
      "field": "property_name",
      "oldValue": "previous value",
      "newValue": "new value",
      "description": "Brief description of what changed in {language}"
    }}
  ]
}}

Return ONLY valid JSON. No explanations, no markdown formatting.
"""

PAGE_EDIT_PROMPT = """\
You are a worksheet editor AI assistant. Your task is to edit an entire
worksheet page based on the user's instruction.

**PAGE DATA:**
```json
{page_data}
```

**USER INSTRUCTION:** {instruction}

**WORKSHEET CONTEXT:**
- Topic: {topic}
- Age Group: {age_group}
- Difficulty: {difficulty}
- Content Language: {language}

{component_library}

**IMPORTANT RULES:**
1. You can add, modify, or remove components
2. Return the COMPLETE updated elements array
3. Use ONLY component types from the list above
4. Match the property schema for each component type exactly
5. Keep content age-appropriate for {age_group}
6. Each element must have: id, type, position, size, properties, zIndex, locked, visible
7. Generate new IDs for new elements: "element-{{timestamp}}-{{random}}"
8. For text content, use {language} language; for image prompts, use English
9. DO NOT include a "url" field whose value is {placeholder} - it is preserved automatically

**RETURN FORMAT - JSON ONLY (no markdown, no code blocks):**
{{
  "patch": {{
    "title": "Updated page title (optional)",
    "elements": [ ... COMPLETE array of all elements ... ]
  }},
  "changes": [
    {{
      "field": "elements",
      "oldValue": "summary of old state",
      "newValue": "summary of new state",
      "description": "Detailed description of what changed in {language}"
    }}
  ]
}}

Return ONLY valid JSON. No explanations, no markdown formatting.
"""


def build_component_edit_prompt(
    *,
    component_type: str,
    component_data: Any,
    instruction: str,
    context: WorksheetEditContext,
    schema_info: str = "",
) -> str:
    """Build the single-component edit prompt.

    Args:
        component_type: The element's type, e.g. ``"tap-image"``.
        component_data: Sanitized element snapshot (JSON-serializable).
        instruction: The user's free-text instruction, verbatim.
        context: Worksheet context passed through to the model.
        schema_info: Registry description of the component's properties.
    """
    return COMPONENT_EDIT_PROMPT.format(
        component_type=component_type,
        component_data=json.dumps(component_data, ensure_ascii=False, indent=2),
        instruction=instruction,
        topic=context.topic,
        age_group=context.age_group,
        difficulty=context.difficulty,
        language=context.language,
        schema_info=schema_info or "(No schema registered for this component.)",
        placeholder=BASE64_PLACEHOLDER,
    )


def build_page_edit_prompt(
    *,
    page_data: Any,
    instruction: str,
    context: WorksheetEditContext,
    component_library: str = "",
) -> str:
    """Build the whole-page edit prompt."""
    return PAGE_EDIT_PROMPT.format(
        page_data=json.dumps(page_data, ensure_ascii=False, indent=2),
        instruction=instruction,
        topic=context.topic,
        age_group=context.age_group,
        difficulty=context.difficulty,
        language=context.language,
        component_library=component_library,
        placeholder=BASE64_PLACEHOLDER,
    )
