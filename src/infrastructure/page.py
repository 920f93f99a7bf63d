"""In-memory page surface: the containers and inputs a controller reads and writes."""

import html
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set


@dataclass
class Element:
    """A page element addressed by id.

    ``html`` holds markup for containers, ``text`` plain text content and
    ``value`` the current value of an input or selector.
    """

    html: str = ""
    text: str = ""
    value: str = ""
    classes: Set[str] = field(default_factory=set)

    def add_class(self, name: str):
        self.classes.add(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes


class Page:
    """Elements of one page keyed by id. Lookups of absent ids return None."""

    def __init__(self, elements: Optional[Dict[str, Element]] = None):
        self.elements: Dict[str, Element] = dict(elements or {})

    @classmethod
    def with_elements(cls, element_ids: Iterable[str]) -> "Page":
        """Create a page holding an empty element for each id."""
        return cls({element_id: Element() for element_id in element_ids})

    def element(self, element_id: str) -> Optional[Element]:
        return self.elements.get(element_id)


def render_document(page: Page, title: str, container_ids: Iterable[str]) -> str:
    """
    Wrap the given containers of a page into a standalone HTML document.

    Containers that are missing from the page are skipped.

    Args:
        page: Page whose containers hold rendered markup
        title: Document title
        container_ids: Ids of the containers to include, in order

    Returns:
        HTML document as a string
    """
    sections = []
    for element_id in container_ids:
        element = page.element(element_id)
        if element is None:
            continue
        content = element.html or html.escape(element.text)
        sections.append(f'<section id="{html.escape(element_id, quote=True)}">{content}</section>')

    body = "\n".join(sections)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )
