"""Quick improvements — canned instructions offered as one-click actions.

Quick actions funnel through the same submission gate as free-text
instructions; they never touch the visible draft.
"""

from __future__ import annotations

from models.edit import EditTarget, QuickImprovement


def _qi(id: str, label: str, icon: str, instruction: str, description: str = "") -> QuickImprovement:
    return QuickImprovement(
        id=id, label=label, icon=icon, instruction=instruction, description=description or label
    )


COMPONENT_QUICK_IMPROVEMENTS: dict[str, list[QuickImprovement]] = {
    "tap-image": [
        _qi("bigger", "Make it bigger", "🔍", "Change the size to large"),
        _qi("caption", "Add caption", "💬", "Add a fun and engaging caption for kids"),
        _qi("animation", "Change animation", "✨", "Change animation to something more exciting"),
    ],
    "simple-drag-drop": [
        _qi("more-items", "Add more items", "➕", "Add 2 more drag and drop items with targets"),
        _qi("easier", "Make it easier", "🎯", "Change difficulty to easy mode with hints"),
        _qi("colors", "Change colors", "🎨", "Use more colorful and vibrant colors for backgrounds"),
    ],
    "color-matcher": [
        _qi("more-colors", "Add more colors", "🌈", "Add 2 more colors to the game"),
        _qi("voice", "Enable voice", "🔊", "Enable voice prompts and auto-voice features"),
        _qi("simplify", "Simplify", "🎯", "Switch to single mode for easier gameplay"),
    ],
    "memory-cards": [
        _qi("more-pairs", "More pairs", "🃏", "Increase grid size to add more pairs"),
        _qi("easier", "Make easier", "⏱️", "Change difficulty to easy with slower card flips"),
        _qi("theme", "Add theme", "🎨", "Add a custom card back image with a fun theme"),
    ],
    "sorting-game": [
        _qi("category", "Add category", "📦", "Add one more category with items"),
        _qi("layout", "Change layout", "🔲", "Change to grid layout for better organization"),
        _qi("more-items", "More items", "➕", "Add 2 more items to sort"),
    ],
}

DEFAULT_COMPONENT_IMPROVEMENTS: list[QuickImprovement] = [
    _qi("improve", "Improve content", "✨", "Make the content more engaging for the target age group"),
    _qi("details", "Add details", "📝", "Add more details and information"),
    _qi("simplify", "Simplify", "🎯", "Simplify the content for easier understanding"),
]

PAGE_QUICK_IMPROVEMENTS: list[QuickImprovement] = [
    _qi(
        "add-component",
        "Add component",
        "Plus",
        "Add a new component to this page that complements the existing content",
    ),
    _qi("reorganize", "Reorganize", "LayoutGrid", "Reorganize the page layout for a cleaner look and easier use"),
    _qi("simplify", "Simplify", "Minimize2", "Make this page simpler and clearer, keep only the essentials"),
    _qi("add-visuals", "Add visuals", "ImageIcon", "Add more visual elements (images, icons) for better perception"),
]

_PLACEHOLDERS: dict[str, str] = {
    "tap-image": "e.g. Make the image bigger and add a caption",
    "simple-drag-drop": "e.g. Add two more items and make targets colorful",
    "memory-cards": "e.g. Use a 3x4 grid with animal pictures",
}


def get_quick_improvements(
    target: EditTarget,
    component_type: str | None = None,
) -> list[QuickImprovement]:
    """Return the quick actions offered for a selection."""
    if target == EditTarget.PAGE:
        return list(PAGE_QUICK_IMPROVEMENTS)
    return list(COMPONENT_QUICK_IMPROVEMENTS.get(component_type or "", DEFAULT_COMPONENT_IMPROVEMENTS))


def get_instruction_placeholder(target: EditTarget, component_type: str | None = None) -> str:
    """Placeholder text for the instruction input."""
    if target == EditTarget.PAGE:
        return "e.g. Add a title and reorganize the page"
    return _PLACEHOLDERS.get(component_type or "", "What should change?")
