#!/usr/bin/env python3

"""
Page Objects.

A page object groups the named elements of one page (buttons, links, ...)
with the locator used to find each of them. Page objects are collected into
a PageObjectRegistry at startup; steps then refer to elements by
``(page name, element name)``.
"""

import logging

logger = logging.getLogger(__name__)

from collections.abc import Iterable
from dataclasses import dataclass, field

from browser.selenium_utils import Locator
from core.exceptions import ConfigurationError, UnknownElementError, UnknownPageObjectError


@dataclass(frozen=True)
class PageObjectElement:
    """A single element in a page object (a button, a link, ...)."""

    name: str  # human readable name within the page object
    locator: Locator
    # Present as soon as the page loads; used by the "displayed correctly" check
    initially_loaded: bool = False


@dataclass(frozen=True)
class PageObject:
    """A named page and its elements."""

    name: str
    elements: tuple[PageObjectElement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for element in self.elements:
            if element.name in seen:
                raise ConfigurationError(f"Duplicate element {element.name!r} in page object {self.name!r}")
            seen.add(element.name)

    def get_element(self, name: str) -> PageObjectElement:
        for element in self.elements:
            if element.name == name:
                return element
        raise UnknownElementError(self.name, name)

    def get_element_by_name(self, name: str) -> Locator:
        """Return the locator of the element called ``name``."""
        return self.get_element(name).locator

    def initially_loaded_elements(self) -> list[PageObjectElement]:
        return [e for e in self.elements if e.initially_loaded]


class PageObjectRegistry:
    """Explicit name -> PageObject table."""

    def __init__(self, page_objects: Iterable[PageObject] = ()) -> None:
        self._pages: dict[str, PageObject] = {}
        for page in page_objects:
            self.register(page)

    def register(self, page: PageObject) -> None:
        if page.name in self._pages:
            raise ConfigurationError(f"Duplicate page object name: {page.name!r}", config_section="pages")
        self._pages[page.name] = page
        logger.debug(f"Registered page object '{page.name}' ({len(page.elements)} elements)")

    def get_page_object(self, name: str) -> PageObject:
        """Retrieve a page object or raise UnknownPageObjectError."""
        try:
            return self._pages[name]
        except KeyError:
            raise UnknownPageObjectError(name) from None

    def get_element_by_name(self, page_name: str, element_name: str) -> Locator:
        """Return the locator of an element of a given page object."""
        return self.get_page_object(page_name).get_element_by_name(element_name)

    def __contains__(self, name: object) -> bool:
        return name in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    def names(self) -> list[str]:
        return list(self._pages)
