"""Turn raw component source into :class:`ComponentRecord` metadata.

Classification is driven by three ordered tables so the rules can be read
and tested without touching the network:

* ``NAME_CATEGORY_RULES``: keyword found in the lower-cased component name.
* ``CONTENT_CATEGORY_RULES``: structural marker found in the source, used
  only when no name keyword matches.
* ``TAG_RULES``: independent predicates, each adding one tag.
"""

from __future__ import annotations

import re
from typing import Iterable, Tuple

from componentfinder.models import ComponentRecord, FileItem

DEFAULT_CATEGORY = "Components"
DEFAULT_LIBRARY = "VengeanceUI"

NAME_CATEGORY_RULES: Tuple[Tuple[str, str], ...] = (
    ("button", "Buttons"),
    ("btn", "Buttons"),
    ("card", "Cards"),
    ("input", "Forms"),
    ("form", "Forms"),
    ("select", "Forms"),
    ("checkbox", "Forms"),
    ("radio", "Forms"),
    ("toggle", "Forms"),
    ("switch", "Forms"),
    ("nav", "Navigation"),
    ("header", "Navigation"),
    ("footer", "Navigation"),
    ("sidebar", "Navigation"),
    ("menu", "Navigation"),
    ("modal", "Overlays"),
    ("dialog", "Overlays"),
    ("popover", "Overlays"),
    ("tooltip", "Overlays"),
    ("dropdown", "Overlays"),
    ("sheet", "Overlays"),
    ("drawer", "Overlays"),
    ("badge", "Data Display"),
    ("avatar", "Data Display"),
    ("list", "Data Display"),
    ("table", "Data Display"),
    ("tabs", "Navigation"),
    ("accordion", "Data Display"),
    ("carousel", "Data Display"),
    ("slider", "Forms"),
    ("progress", "Feedback"),
    ("spinner", "Feedback"),
    ("loader", "Feedback"),
    ("skeleton", "Feedback"),
    ("alert", "Feedback"),
    ("toast", "Feedback"),
    ("notification", "Feedback"),
    ("layout", "Layout"),
    ("container", "Layout"),
    ("grid", "Layout"),
    ("flex", "Layout"),
    ("section", "Layout"),
    ("divider", "Layout"),
    ("separator", "Layout"),
    ("space", "Layout"),
    ("typography", "Typography"),
    ("text", "Typography"),
    ("heading", "Typography"),
    ("title", "Typography"),
    ("label", "Typography"),
    ("icon", "Icons"),
    ("image", "Media"),
    ("video", "Media"),
    ("animation", "Animation"),
    ("transition", "Animation"),
    ("effect", "Animation"),
    ("gradient", "Styles"),
    ("theme", "Styles"),
    ("chart", "Data Visualization"),
    ("graph", "Data Visualization"),
)

# Case-sensitive: these look for JSX element and identifier names.
CONTENT_CATEGORY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("Button", "btn"), "Buttons"),
    (("Card",), "Cards"),
    (("Input", "Form"), "Forms"),
    (("Modal", "Dialog"), "Overlays"),
    (("Nav",), "Navigation"),
)

TAG_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("animation", ("@keyframes", "animation")),
    ("animated", ("transition", "transform")),
    ("interactive", ("onClick", "onChange", "onHover")),
    ("gradient", ("gradient",)),
    ("tailwind", ("Tailwind", "className")),
    ("styled-components", ("styled",)),
    ("layout", ("flex", "grid")),
    ("responsive", ("responsive", "md:", "lg:")),
    ("hooks", ("useRef", "useEffect", "useState")),
    ("composable", ("forwardRef",)),
    ("compound", ("children",)),
)

EXCLUDED_DEPENDENCY_PREFIXES = (".", "node:")

_EXTENSION_RE = re.compile(r"\.(tsx?|jsx?)$")
_DOC_BLOCK_RE = re.compile(r"/\*\*\s*\n(.*?)\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"(?<![:/])//(?!/)[ \t]*(\S.*)")
_IMPORT_FROM_RE = re.compile(r"""\bimport\s+(?:type\s+)?[\w*{}\s,$]+?\s+from\s+['"]([^'"\s]+)['"]""")
_IMPORT_BARE_RE = re.compile(r"""\bimport\s+['"]([^'"\s]+)['"]""")
_REQUIRE_RE = re.compile(r"""\brequire\(\s*['"]([^'"\s]+)['"]\s*\)""")


def extract_component_name(filename: str) -> str:
    return _EXTENSION_RE.sub("", filename)


def extract_category(name: str, code: str) -> str:
    """Classify by name keyword first, then by structural markers in the code."""
    name_lower = name.lower()
    for keyword, category in NAME_CATEGORY_RULES:
        if keyword in name_lower:
            return category

    for markers, category in CONTENT_CATEGORY_RULES:
        if any(marker in code for marker in markers):
            return category

    return DEFAULT_CATEGORY


def extract_description(code: str, name: str, library: str = DEFAULT_LIBRARY) -> str:
    """Use the first doc-comment sentence, else the first line comment, else a stub."""
    block = _DOC_BLOCK_RE.search(code)
    if block:
        for line in block.group(1).splitlines():
            text = line.strip().lstrip("*").strip()
            if text and not text.startswith("@"):
                return text

    comment = _LINE_COMMENT_RE.search(code)
    if comment:
        text = comment.group(1).strip()
        if text:
            return text

    return f"{name} component from {library}"


def extract_tags(code: str) -> Tuple[str, ...]:
    tags = {tag for tag, markers in TAG_RULES if any(marker in code for marker in markers)}
    return tuple(sorted(tags))


def extract_dependencies(code: str) -> Tuple[str, ...]:
    """Collect external module specifiers from import and require statements."""
    specifiers: Iterable[str] = (
        match.group(1)
        for pattern in (_IMPORT_FROM_RE, _IMPORT_BARE_RE, _REQUIRE_RE)
        for match in pattern.finditer(code)
    )
    dependencies = {
        spec for spec in specifiers if not spec.startswith(EXCLUDED_DEPENDENCY_PREFIXES)
    }
    return tuple(sorted(dependencies))


def extract(item: FileItem, code: str, *, library: str = DEFAULT_LIBRARY) -> ComponentRecord:
    """Build the record for one file. Pure and deterministic."""
    name = extract_component_name(item.name)
    return ComponentRecord(
        name=name,
        category=extract_category(name, code),
        description=extract_description(code, name, library),
        tags=extract_tags(code),
        dependencies=extract_dependencies(code),
        code=code,
        path=item.path,
        size=item.size,
        source_url=item.html_url,
    )
