"""Design-system contract: component catalog, spacing grid, accessibility and i18n tables."""

import re

DESIGN_SYSTEM_PACKAGE = "@xala-technologies/ui-system"

# Approved semantic components. Link, ListItem and Image are included because
# the raw-element replacement table suggests them.
APPROVED_COMPONENTS: frozenset[str] = frozenset({
    "Box", "Stack", "Grid", "Container", "Section",
    "Typography", "Text", "Heading",
    "Button", "IconButton", "ButtonGroup",
    "Input", "TextArea", "Select", "Checkbox", "Radio", "Switch",
    "Card", "Modal", "Drawer", "Dialog", "Toast", "Alert",
    "Table", "DataTable", "List", "ListItem",
    "Navigation", "Sidebar", "Header", "Footer",
    "Avatar", "Badge", "Tag", "Chip",
    "Progress", "Spinner", "Skeleton",
    "Tabs", "Accordion", "Menu", "Dropdown",
    "Form", "FormField", "FormLabel", "FormError",
    "DatePicker", "TimePicker", "Calendar",
    "Tooltip", "Popover",
    "Link", "Image",
})

RAW_HTML_ELEMENTS: frozenset[str] = frozenset({
    "div", "span", "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "a", "button", "input", "select", "textarea", "form",
    "ul", "ol", "li", "table", "tr", "td", "th",
    "header", "footer", "main", "section", "article", "aside",
    "nav", "img", "video", "audio", "canvas", "svg",
})

SEMANTIC_COMPONENT_MAP: dict[str, str] = {
    "div": "Box",
    "span": "Text",
    "p": "Text",
    "h1": "Heading",
    "h2": "Heading",
    "h3": "Heading",
    "h4": "Heading",
    "h5": "Heading",
    "h6": "Heading",
    "a": "Link",
    "button": "Button",
    "input": "Input",
    "select": "Select",
    "textarea": "TextArea",
    "form": "Form",
    "ul": "List",
    "ol": "List",
    "li": "ListItem",
    "table": "Table",
    "header": "Header",
    "footer": "Footer",
    "main": "Container",
    "section": "Section",
    "article": "Card",
    "aside": "Sidebar",
    "nav": "Navigation",
    "img": "Image",
}
DEFAULT_SEMANTIC_COMPONENT = "Box"


def suggest_semantic_component(tag: str) -> str:
    """Approved component replacing a raw HTML tag (Box when unmapped)."""
    return SEMANTIC_COMPONENT_MAP.get(tag.lower(), DEFAULT_SEMANTIC_COMPONENT)


# Spacing scale indexes accepted by spacing[n] tokens and utility classes
# (p-4, gap-6, ...). One index step is 4px.
GRID_INDEX_VALUES: tuple[int, ...] = (
    0, 1, 2, 3, 4, 6, 8, 10, 12, 14, 16, 20, 24, 28, 32,
    36, 40, 44, 48, 52, 56, 60, 64, 72, 80, 96,
)
GRID_STEP_PX = 4
# Permitted spacing magnitudes in pixels.
ENHANCED_8PT_GRID: frozenset[float] = frozenset(i * GRID_STEP_PX for i in GRID_INDEX_VALUES)
ROOT_FONT_SIZE_PX = 16


def nearest_grid_value(pixels: float) -> int:
    """
    Closest spacing index for a raw pixel value.

    round(pixels / 4), then the index with the smallest absolute difference;
    ties go to the first (smaller) index in ascending order.
    """
    target = _round_half_up(pixels / GRID_STEP_PX)
    best = GRID_INDEX_VALUES[0]
    for candidate in GRID_INDEX_VALUES:
        if abs(candidate - target) < abs(best - target):
            best = candidate
    return best


def _round_half_up(value: float) -> int:
    # Math.round semantics, not Python's banker's rounding.
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def is_on_grid(pixels: float) -> bool:
    return pixels in ENHANCED_8PT_GRID


def to_pixels(value: float, unit: str) -> float:
    """px stays as is; rem and em are resolved against a 16px root."""
    return value * ROOT_FONT_SIZE_PX if unit in ("rem", "em") else value


# --- Raw value patterns --------------------------------------------------------

# First hex literal or color function on a line.
HARDCODED_COLOR = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\(|hsla?\(")
# padding: 13px, margin-top: 1.5rem, gap="10px", paddingLeft: '6px'
SPACING_DECLARATION = re.compile(
    r"(?:padding|margin|gap|space)(?:-?[a-zA-Z]+)?[\"']?\s*[:=]?\s*[\"'`{]?\s*"
    r"(?P<value>\d+(?:\.\d+)?)(?P<unit>px|rem|em)\b"
)
# w-[13px], bg-[#fff], text-[rgb(1,2,3)]
ARBITRARY_VALUE = re.compile(
    r"\[(?P<value>[\d.]+(?:px|rem|em|%|vh|vw)|#[0-9a-fA-F]{3,8}|rgba?\([^)]+\))\]"
)
# p-7, mx-5, -mt-3, gap-x-9, space-y-7 (the index is the last group)
SPACING_CLASS = re.compile(
    r"(?<![\w-])-?(?P<utility>p[xytblrse]?|m[xytblrse]?|gap(?:-[xy])?|space-[xy])-(?P<index>\d+)(?![\w.])"
)
# text-gray-500, bg-blue-100, border-red-600
COLOR_CLASS = re.compile(
    r"(?<![\w-])(?:text|bg|border)-(?!current\b|transparent\b|inherit\b)"
    r"(?P<name>[a-z]{2,})-(?P<shade>\d{2,3})(?![\w-])"
)

# --- Accessibility -----------------------------------------------------------

INTERACTIVE_TAGS: frozenset[str] = frozenset({"button", "a", "input", "select", "textarea"})
INTERACTIVE_ROLES: frozenset[str] = frozenset({
    "button", "link", "textbox", "combobox", "listbox", "menu", "menuitem",
})
# Elements that are natively keyboard operable, host or design-system.
KEYBOARD_OPERABLE: frozenset[str] = INTERACTIVE_TAGS | {
    "Button", "Link", "Input", "Select", "TextArea",
    "IconButton", "Checkbox", "Radio", "Switch",
}
IMAGE_TAGS: frozenset[str] = frozenset({"img", "Image"})
INTERACTION_HANDLERS: tuple[str, ...] = ("onClick", "onKeyDown", "onKeyPress")
KEYBOARD_HANDLERS: tuple[str, ...] = ("onKeyDown", "onKeyPress", "onKeyUp")
LABEL_ATTRIBUTES: tuple[str, ...] = ("aria-label", "aria-labelledby", "aria-describedby")
TEXT_LABELLED_TAGS: frozenset[str] = frozenset({"button", "a"})
IMAGE_LABEL_ATTRIBUTES: tuple[str, ...] = ("alt", "aria-label", "aria-labelledby")
FORM_CONTROL_TAGS: frozenset[str] = frozenset({"input", "select", "textarea"})
FOCUS_TRAP_COMPONENTS: frozenset[str] = frozenset({"Modal", "Dialog", "Drawer"})

WCAG_DOCS = "https://www.w3.org/WAI/WCAG22/Understanding/"
WCAG_NAME_ROLE_VALUE = WCAG_DOCS + "name-role-value"
WCAG_NON_TEXT_CONTENT = WCAG_DOCS + "non-text-content"
WCAG_LABELS = WCAG_DOCS + "labels-or-instructions"
WCAG_FOCUS_ORDER = WCAG_DOCS + "focus-order"
WCAG_FOCUS_VISIBLE = WCAG_DOCS + "focus-visible"
WCAG_HEADINGS = WCAG_DOCS + "headings-and-labels"
WCAG_CONTRAST = WCAG_DOCS + "contrast-enhanced"
WCAG_KEYBOARD = WCAG_DOCS + "keyboard"
WCAG_CONTRAST_MINIMUM = WCAG_DOCS + "contrast-minimum"
DIALOG_PATTERN_DOCS = "https://www.w3.org/WAI/ARIA/apg/patterns/dialog-modal/"

# Class combinations known to fail contrast requirements.
LOW_CONTRAST_CLASS_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"text-gray-400.*bg-gray-100"), "Gray on gray may have insufficient contrast"),
    (re.compile(r"text-yellow-.*bg-white"), "Yellow on white may have insufficient contrast"),
    (re.compile(r"text-orange-[123]00.*bg-white"), "Light orange on white may have insufficient contrast"),
    (re.compile(r"text-blue-[123]00.*bg-white"), "Light blue on white may have insufficient contrast"),
)

# --- Localization ------------------------------------------------------------

LOCALIZATION_DOCS = "https://docs.xala.tech/localization"
RTL_DOCS = "https://docs.xala.tech/rtl-support"
RTL_LANGUAGES: frozenset[str] = frozenset({"ar", "he", "fa", "ur"})

TEXT_ATTRIBUTES: tuple[str, ...] = ("placeholder", "title", "alt", "aria-label")

# t(...), i18n.t(...), i18n.anything, translate(...), trans(...)
TRANSLATION_CALLEE = re.compile(r"^(t|translate|trans|i18n\.[A-Za-z_$][\w$]*)$")

_ACCEPTABLE_SYMBOLS = re.compile(r"^[\d\s\-+*/%=<>.,;:!?@#$&()\[\]{}|\\]+$")
_URL = re.compile(r"^https?://")
_CONSTANT = re.compile(r"^[A-Z][A-Z0-9_]*$")
_WORDS = re.compile(r"[a-zA-Z]{2,}")


def is_acceptable_literal_text(text: str) -> bool:
    """Digits, single characters, punctuation-only strings, ellipsis/dashes, URLs and CONSTANTS."""
    text = text.strip()
    return (
        len(text) <= 1
        or bool(_ACCEPTABLE_SYMBOLS.match(text))
        or text in ("...", "…", "—", "–")
        or bool(_URL.match(text))
        or bool(_CONSTANT.match(text))
    )


def is_translation_callee(name: str | None) -> bool:
    return bool(name) and bool(TRANSLATION_CALLEE.match(name or ""))


def contains_words(text: str) -> bool:
    return bool(_WORDS.search(text))


LOCALE_FORMAT_METHODS: frozenset[str] = frozenset({"toFixed", "toPrecision", "toExponential"})
DATE_STRING_METHODS: frozenset[str] = frozenset({"toString", "toDateString", "toTimeString"})
CURRENCY_SYMBOLS = re.compile("[$€£¥₹₨]")
# "3 items" inside a template literal.
COUNTED_NOUN = re.compile(r"\d+\s+\w+s?\b")

# --- Layout direction ----------------------------------------------------------

# CSS property (kebab and camel case) -> logical replacement.
LOGICAL_PROPERTY_MAP: dict[str, str] = {
    "left": "inset-inline-start",
    "right": "inset-inline-end",
    "margin-left": "margin-inline-start",
    "margin-right": "margin-inline-end",
    "padding-left": "padding-inline-start",
    "padding-right": "padding-inline-end",
    "border-left": "border-inline-start",
    "border-right": "border-inline-end",
    "marginLeft": "marginInlineStart",
    "marginRight": "marginInlineEnd",
    "paddingLeft": "paddingInlineStart",
    "paddingRight": "paddingInlineEnd",
    "borderLeft": "borderInlineStart",
    "borderRight": "borderInlineEnd",
}
# Properties whose left/right *values* are unsafe: text-align: left, float: right.
DIRECTIONAL_VALUE_PROPERTIES: frozenset[str] = frozenset({"text-align", "textAlign", "float", "clear"})
LOGICAL_VALUE_MAP: dict[str, str] = {"left": "start", "right": "end"}

# Declarations in CSS text (stylesheets and style="..." strings).
CSS_DIRECTIONAL_PROPERTY = re.compile(
    r"(?<![\w-])(?P<property>(?:margin|padding|border)-(?:left|right)|left|right)\s*:"
)
CSS_DIRECTIONAL_VALUE = re.compile(
    r"(?<![\w-])(?P<property>text-align|float|clear)\s*:\s*(?P<value>left|right)\b"
)

# Utility classes that hard-code a side.
DIRECTIONAL_CLASS = re.compile(
    r"(?<![\w-])(?:"
    r"(?:left|right)-\d+"
    r"|[mp][lr]-\d+(?:\.\d+)?"
    r"|text-(?:left|right)"
    r"|float-(?:left|right)"
    r"|border-[lr](?:-[\w.]+)?"
    r"|rounded-[lr](?:-[\w.]+)?"
    r")(?![\w-])"
)
_CLASS_REWRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^ml-"), "ms-"),
    (re.compile(r"^mr-"), "me-"),
    (re.compile(r"^pl-"), "ps-"),
    (re.compile(r"^pr-"), "pe-"),
    (re.compile(r"^border-l\b"), "border-s"),
    (re.compile(r"^border-r\b"), "border-e"),
    (re.compile(r"^rounded-l\b"), "rounded-s"),
    (re.compile(r"^rounded-r\b"), "rounded-e"),
    (re.compile(r"left"), "start"),
    (re.compile(r"right"), "end"),
)


def logical_class(directional: str) -> str:
    """RTL-safe utility class for a directional one (ml-4 -> ms-4, text-left -> text-start)."""
    for pattern, replacement in _CLASS_REWRITES:
        if pattern.search(directional):
            return pattern.sub(replacement, directional, count=1)
    return directional
