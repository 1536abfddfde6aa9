"""
Minimal element tree for the storefront page.

The controller mutates these handles; the Streamlit page turns them into HTML
with ``to_html()``. Text content is always escaped, attribute values too.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Dict, Iterator, List, Optional

VOID_TAGS = {"img", "input", "br", "hr"}


@dataclass(eq=False)
class Element:
    tag: str
    classes: List[str] = field(default_factory=list)
    attrs: Dict[str, str] = field(default_factory=dict)
    style: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: List["Element"] = field(default_factory=list)
    client_height: int = 0

    # ---------- tree mutation ----------

    def append(self, *children: "Element") -> None:
        self.children.extend(children)

    def remove(self, child: "Element") -> None:
        # identity, not equality
        self.children = [c for c in self.children if c is not child]

    def clear(self) -> None:
        self.children.clear()

    # ---------- lookup ----------

    def matches(self, selector: str) -> bool:
        """Match a single simple selector: ``tag``, ``.class`` or ``#id``."""
        if selector.startswith("."):
            return selector[1:] in self.classes
        if selector.startswith("#"):
            return self.attrs.get("id") == selector[1:]
        return self.tag == selector

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find(self, selector: str) -> Optional["Element"]:
        return next((e for e in self.iter_descendants() if e.matches(selector)), None)

    def find_all(self, selector: str) -> List["Element"]:
        return [e for e in self.iter_descendants() if e.matches(selector)]

    def text_content(self) -> str:
        return self.text + "".join(c.text_content() for c in self.children)

    # ---------- output ----------

    def to_html(self) -> str:
        attrs = dict(self.attrs)
        if self.classes:
            attrs["class"] = " ".join(self.classes)
        if self.style:
            attrs["style"] = "; ".join(f"{k}: {v}" for k, v in self.style.items())
        rendered = "".join(f' {k}="{escape(str(v), quote=True)}"' for k, v in attrs.items())
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{rendered}>"
        inner = escape(self.text) + "".join(c.to_html() for c in self.children)
        return f"<{self.tag}{rendered}>{inner}</{self.tag}>"


@dataclass
class StorefrontPage:
    """Handles the controller needs, resolved once when the page is built."""
    root: Element
    navbar: Element
    hero: Element
    search_box: Element
    container: Element


def build_page(hero_height: int = 500) -> StorefrontPage:
    """Build the default storefront layout: navbar, hero carousel, search bar, products."""
    navbar = Element("nav", classes=["navbar", "fixed-top"])
    hero = Element("div", classes=["carousel"], client_height=hero_height)
    search_box = Element("input", attrs={"id": "search-bar", "type": "search", "value": ""})
    container = Element("div", classes=["products", "container"])
    root = Element("div", classes=["storefront"])
    root.append(navbar, hero, search_box, container)
    return StorefrontPage(
        root=root,
        navbar=navbar,
        hero=hero,
        search_box=search_box,
        container=container,
    )
