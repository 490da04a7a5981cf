"""Property schemas for interactive worksheet components.

Each entry declares the editable surface of one component type.  The table
is validated into :class:`ComponentPropertySchema` models once at import by
``config.component_registry``; adding a component type requires:
  1. Frontend: implement the renderer
  2. Backend: add an entry here
  3. The LLM edit prompt picks it up automatically via get_registry_description()
"""

from __future__ import annotations

from typing import Any

_SIZE_OPTIONS = [
    {"value": "small", "label": "Small (200px)"},
    {"value": "medium", "label": "Medium (350px)"},
    {"value": "large", "label": "Large (500px)"},
]

_EMOJI_TEXT = [
    {"key": "emoji", "label": "Emoji", "type": "string", "required": True},
    {"key": "text", "label": "Text", "type": "string", "required": True},
]

PROPERTY_SCHEMA_TABLE: list[dict[str, Any]] = [
    {
        "component_type": "tap-image",
        "component_name": "Tap Image",
        "icon": "👆",
        "properties": [
            {
                "key": "imageUrl",
                "label": "Image URL",
                "type": "url",
                "required": True,
                "placeholder": "https://example.com/image.jpg",
                "helper_text": "URL of the image to display",
            },
            {
                "key": "caption",
                "label": "Caption",
                "type": "string",
                "placeholder": "Tap me!",
                "helper_text": "Text shown below the image",
            },
            {"key": "size", "label": "Size", "type": "select", "default": "medium", "options": _SIZE_OPTIONS},
            {
                "key": "animation",
                "label": "Animation",
                "type": "select",
                "default": "bounce",
                "options": [
                    {"value": "bounce", "label": "Bounce"},
                    {"value": "scale", "label": "Scale"},
                    {"value": "shake", "label": "Shake"},
                    {"value": "spin", "label": "Spin"},
                ],
            },
            {
                "key": "soundEffect",
                "label": "Sound Effect",
                "type": "select",
                "default": "praise",
                "options": [
                    {"value": "praise", "label": "Praise"},
                    {"value": "animal", "label": "Animal"},
                    {"value": "action", "label": "Action"},
                    {"value": "custom", "label": "Custom"},
                ],
            },
            {
                "key": "showHint",
                "label": "Show Hint",
                "type": "boolean",
                "default": False,
                "helper_text": "Display animated hand hint",
            },
        ],
    },
    {
        "component_type": "simple-drag-drop",
        "component_name": "Drag and Drop",
        "icon": "🎯",
        "properties": [
            {
                "key": "items",
                "label": "Draggable Items",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "imageUrl", "label": "Image URL", "type": "url", "required": True},
                    {"key": "correctTarget", "label": "Correct Target ID", "type": "string", "required": True},
                    {"key": "label", "label": "Label", "type": "string"},
                ],
            },
            {
                "key": "targets",
                "label": "Drop Targets",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "label", "label": "Label", "type": "string", "required": True},
                    {"key": "backgroundColor", "label": "Background Color", "type": "color"},
                ],
            },
            {
                "key": "layout",
                "label": "Layout",
                "type": "select",
                "default": "horizontal",
                "options": [
                    {"value": "horizontal", "label": "Horizontal"},
                    {"value": "vertical", "label": "Vertical"},
                    {"value": "grid", "label": "Grid"},
                ],
            },
            {
                "key": "difficulty",
                "label": "Difficulty",
                "type": "select",
                "default": "easy",
                "options": [
                    {"value": "easy", "label": "Easy (with hints)"},
                    {"value": "medium", "label": "Medium (no hints)"},
                ],
            },
            {
                "key": "snapDistance",
                "label": "Snap Distance (px)",
                "type": "number",
                "default": 80,
                "min": 50,
                "max": 200,
                "helper_text": "Distance at which items snap to targets",
            },
        ],
    },
    {
        "component_type": "color-matcher",
        "component_name": "Color Matcher",
        "icon": "🎨",
        "properties": [
            {
                "key": "colors",
                "label": "Colors",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "name", "label": "Name", "type": "string", "required": True},
                    {"key": "hex", "label": "Hex Color", "type": "color", "required": True},
                    {"key": "voicePrompt", "label": "Voice Prompt", "type": "string"},
                ],
            },
            {
                "key": "mode",
                "label": "Mode",
                "type": "select",
                "default": "single",
                "options": [
                    {"value": "single", "label": "Single (one at a time)"},
                    {"value": "multiple", "label": "Multiple (all at once)"},
                ],
            },
            {"key": "showNames", "label": "Show Color Names", "type": "boolean", "default": True},
            {"key": "autoVoice", "label": "Auto Voice Prompts", "type": "boolean", "default": True},
        ],
    },
    {
        "component_type": "simple-counter",
        "component_name": "Counter",
        "icon": "🔢",
        "properties": [
            {
                "key": "objects",
                "label": "Objects to Count",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "imageUrl", "label": "Image URL", "type": "url", "required": True},
                    {"key": "count", "label": "Count", "type": "number", "required": True, "min": 1, "max": 20},
                ],
            },
            {"key": "voiceEnabled", "label": "Voice Enabled", "type": "boolean", "default": True},
            {"key": "celebrationAtEnd", "label": "Celebration at End", "type": "boolean", "default": True},
            {"key": "showProgress", "label": "Show Progress", "type": "boolean", "default": True},
        ],
    },
    {
        "component_type": "memory-cards",
        "component_name": "Memory Cards",
        "icon": "🃏",
        "properties": [
            {
                "key": "pairs",
                "label": "Card Pairs",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "imageUrl", "label": "Image URL", "type": "url", "required": True},
                ],
            },
            {
                "key": "gridSize",
                "label": "Grid Size",
                "type": "select",
                "default": "2x2",
                "options": [
                    {"value": "2x2", "label": "2x2 (2 pairs)"},
                    {"value": "2x3", "label": "2x3 (3 pairs)"},
                    {"value": "3x4", "label": "3x4 (6 pairs)"},
                    {"value": "4x4", "label": "4x4 (8 pairs)"},
                ],
            },
            {
                "key": "difficulty",
                "label": "Difficulty",
                "type": "select",
                "default": "easy",
                "options": [
                    {"value": "easy", "label": "Easy (slower flips)"},
                    {"value": "medium", "label": "Medium"},
                    {"value": "hard", "label": "Hard (faster flips)"},
                ],
            },
            {
                "key": "cardBackImage",
                "label": "Card Back Image URL",
                "type": "url",
                "placeholder": "Leave empty for default pattern",
            },
        ],
    },
    {
        "component_type": "sorting-game",
        "component_name": "Sorting Game",
        "icon": "📦",
        "properties": [
            {
                "key": "items",
                "label": "Items to Sort",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "imageUrl", "label": "Image URL", "type": "url", "required": True},
                    {"key": "category", "label": "Category ID", "type": "string", "required": True},
                    {"key": "label", "label": "Label", "type": "string"},
                ],
            },
            {
                "key": "categories",
                "label": "Categories",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "name", "label": "Name", "type": "string", "required": True},
                    {"key": "color", "label": "Color", "type": "color", "required": True},
                    {"key": "icon", "label": "Icon (emoji)", "type": "string"},
                ],
            },
            {
                "key": "sortBy",
                "label": "Sort By",
                "type": "select",
                "default": "type",
                "options": [
                    {"value": "type", "label": "Type/Category"},
                    {"value": "color", "label": "Color"},
                    {"value": "size", "label": "Size"},
                ],
            },
            {
                "key": "layout",
                "label": "Layout",
                "type": "select",
                "default": "horizontal",
                "options": [
                    {"value": "horizontal", "label": "Horizontal"},
                    {"value": "vertical", "label": "Vertical"},
                ],
            },
        ],
    },
    {
        "component_type": "sequence-builder",
        "component_name": "Sequence Builder",
        "icon": "🔢",
        "properties": [
            {
                "key": "steps",
                "label": "Sequence Steps",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "imageUrl", "label": "Image URL", "type": "url", "required": True},
                    {"key": "order", "label": "Correct Order", "type": "number", "required": True, "min": 1},
                    {"key": "label", "label": "Label", "type": "string"},
                ],
            },
            {
                "key": "instruction",
                "label": "Instruction",
                "type": "string",
                "default": "Put the pictures in the right order!",
            },
            {"key": "showNumbers", "label": "Show Numbers", "type": "boolean", "default": True},
            {
                "key": "difficulty",
                "label": "Difficulty",
                "type": "select",
                "default": "easy",
                "options": [
                    {"value": "easy", "label": "Easy (3-4 steps)"},
                    {"value": "medium", "label": "Medium (5-6 steps)"},
                    {"value": "hard", "label": "Hard (7+ steps)"},
                ],
            },
        ],
    },
    {
        "component_type": "shape-tracer",
        "component_name": "Shape Tracer",
        "icon": "✏️",
        "properties": [
            {
                "key": "shapePath",
                "label": "SVG Path",
                "type": "string",
                "required": True,
                "placeholder": "M 100,50 L 200,50 L 200,150 L 100,150 Z",
                "helper_text": "SVG path data for the shape",
            },
            {"key": "shapeName", "label": "Shape Name", "type": "string", "required": True, "placeholder": "Square"},
            {
                "key": "difficulty",
                "label": "Difficulty",
                "type": "select",
                "default": "easy",
                "options": [
                    {"value": "easy", "label": "Easy (simple shapes)"},
                    {"value": "medium", "label": "Medium"},
                    {"value": "hard", "label": "Hard (complex shapes)"},
                ],
            },
            {"key": "strokeWidth", "label": "Stroke Width", "type": "number", "default": 8, "min": 4, "max": 20},
            {"key": "guideColor", "label": "Guide Color", "type": "color", "default": "#3B82F6"},
            {"key": "traceColor", "label": "Trace Color", "type": "color", "default": "#10B981"},
        ],
    },
    {
        "component_type": "emotion-recognizer",
        "component_name": "Emotion Recognizer",
        "icon": "😊",
        "properties": [
            {
                "key": "emotions",
                "label": "Emotions",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "name", "label": "Name", "type": "string", "required": True},
                    {"key": "emoji", "label": "Emoji", "type": "string", "required": True},
                    {"key": "description", "label": "Description", "type": "string"},
                ],
            },
            {
                "key": "mode",
                "label": "Mode",
                "type": "select",
                "default": "identify",
                "options": [
                    {"value": "identify", "label": "Identify (tap to select)"},
                    {"value": "match", "label": "Match (drag and drop)"},
                ],
            },
            {"key": "showDescriptions", "label": "Show Descriptions", "type": "boolean", "default": True},
            {"key": "voiceEnabled", "label": "Voice Prompts", "type": "boolean", "default": True},
        ],
    },
    {
        "component_type": "sound-matcher",
        "component_name": "Sound Matcher",
        "icon": "🔊",
        "properties": [
            {
                "key": "items",
                "label": "Sound Items",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "imageUrl", "label": "Image URL", "type": "url", "required": True},
                    {
                        "key": "soundText",
                        "label": "Sound Text",
                        "type": "string",
                        "required": True,
                        "helper_text": "Text to be spoken",
                    },
                    {"key": "label", "label": "Label", "type": "string"},
                ],
            },
            {
                "key": "mode",
                "label": "Mode",
                "type": "select",
                "default": "identify",
                "options": [
                    {"value": "identify", "label": "Identify (listen and tap)"},
                    {"value": "match", "label": "Match (match sound to image)"},
                ],
            },
            {"key": "autoPlayFirst", "label": "Auto Play First", "type": "boolean", "default": True},
        ],
    },
    {
        "component_type": "simple-puzzle",
        "component_name": "Puzzle",
        "icon": "🧩",
        "properties": [
            {
                "key": "imageUrl",
                "label": "Image URL",
                "type": "url",
                "required": True,
                "placeholder": "https://example.com/puzzle-image.jpg",
            },
            {
                "key": "pieces",
                "label": "Number of Pieces",
                "type": "select",
                "default": 4,
                "options": [
                    {"value": 4, "label": "4 pieces (2x2)"},
                    {"value": 6, "label": "6 pieces (2x3)"},
                    {"value": 9, "label": "9 pieces (3x3)"},
                    {"value": 12, "label": "12 pieces (3x4)"},
                ],
            },
            {
                "key": "difficulty",
                "label": "Difficulty",
                "type": "select",
                "default": "easy",
                "options": [
                    {"value": "easy", "label": "Easy (with outline)"},
                    {"value": "medium", "label": "Medium"},
                    {"value": "hard", "label": "Hard (no hints)"},
                ],
            },
            {"key": "showOutline", "label": "Show Outline", "type": "boolean", "default": True},
        ],
    },
    {
        "component_type": "pattern-builder",
        "component_name": "Pattern Builder",
        "icon": "🔷",
        "properties": [
            {
                "key": "pattern",
                "label": "Pattern Elements",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "color", "label": "Color", "type": "color", "required": True},
                ],
            },
            {
                "key": "patternType",
                "label": "Pattern Type",
                "type": "select",
                "default": "color",
                "options": [
                    {"value": "color", "label": "Color Pattern"},
                    {"value": "shape", "label": "Shape Pattern"},
                    {"value": "both", "label": "Color & Shape"},
                ],
            },
            {
                "key": "difficulty",
                "label": "Difficulty",
                "type": "select",
                "default": "easy",
                "options": [
                    {"value": "easy", "label": "Easy (2 elements)"},
                    {"value": "medium", "label": "Medium (3 elements)"},
                    {"value": "hard", "label": "Hard (4+ elements)"},
                ],
            },
            {
                "key": "repetitions",
                "label": "Repetitions",
                "type": "number",
                "default": 2,
                "min": 1,
                "max": 5,
                "helper_text": "How many times the pattern repeats",
            },
        ],
    },
    {
        "component_type": "cause-effect",
        "component_name": "Cause & Effect",
        "icon": "🔗",
        "properties": [
            {
                "key": "pairs",
                "label": "Cause-Effect Pairs",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "cause", "label": "Cause", "type": "object", "required": True, "object_schema": _EMOJI_TEXT},
                    {"key": "effect", "label": "Effect", "type": "object", "required": True, "object_schema": _EMOJI_TEXT},
                ],
            },
            {"key": "showText", "label": "Show Text Labels", "type": "boolean", "default": True},
            {"key": "voiceEnabled", "label": "Voice Prompts", "type": "boolean", "default": True},
        ],
    },
    {
        "component_type": "reward-collector",
        "component_name": "Reward Collector",
        "icon": "⭐",
        "properties": [
            {
                "key": "tasks",
                "label": "Tasks",
                "type": "array-object",
                "required": True,
                "object_schema": [
                    {"key": "id", "label": "ID", "type": "string", "required": True},
                    {"key": "text", "label": "Task Text", "type": "string", "required": True},
                    {"key": "emoji", "label": "Emoji", "type": "string"},
                ],
            },
            {"key": "rewardTitle", "label": "Reward Title", "type": "string", "default": "Great Job!"},
            {"key": "rewardEmoji", "label": "Reward Emoji", "type": "string", "default": "🎁"},
            {"key": "starsPerTask", "label": "Stars Per Task", "type": "number", "default": 1, "min": 1, "max": 5},
        ],
    },
    {
        "component_type": "voice-recorder",
        "component_name": "Voice Recorder",
        "icon": "🎤",
        "properties": [
            {
                "key": "prompt",
                "label": "Prompt",
                "type": "string",
                "required": True,
                "default": "Record your voice!",
                "placeholder": "Tell me about your day!",
            },
            {"key": "maxDuration", "label": "Max Duration (seconds)", "type": "number", "default": 30, "min": 5, "max": 120},
            {"key": "showPlayback", "label": "Show Playback", "type": "boolean", "default": True},
            {"key": "autoPlay", "label": "Auto Play Recording", "type": "boolean", "default": False},
        ],
    },
]
