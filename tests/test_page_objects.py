#!/usr/bin/env python3
"""Tests for core.page_objects"""

import sys

from selenium.webdriver.common.by import By

from core.exceptions import ConfigurationError, UnknownElementError, UnknownPageObjectError
from core.page_objects import PageObject, PageObjectElement, PageObjectRegistry
from testing.test_utilities import create_standard_test_runner

SEARCH_PAGE = PageObject(
    "Search",
    (
        PageObjectElement("Query", (By.NAME, "q"), initially_loaded=True),
        PageObjectElement("Submit", (By.CSS_SELECTOR, "button.search"), initially_loaded=True),
        PageObjectElement("Results", (By.ID, "results")),
    ),
)


def test_get_element_by_name_returns_locator():
    assert SEARCH_PAGE.get_element_by_name("Query") == (By.NAME, "q")
    assert SEARCH_PAGE.get_element("Results").initially_loaded is False


def test_unknown_element_is_reported_with_page():
    try:
        SEARCH_PAGE.get_element_by_name("Filters")
    except UnknownElementError as e:
        assert e.page_name == "Search"
        assert e.element_name == "Filters"
    else:
        raise AssertionError("unknown element should raise UnknownElementError")


def test_initially_loaded_elements_keep_declaration_order():
    names = [e.name for e in SEARCH_PAGE.initially_loaded_elements()]
    assert names == ["Query", "Submit"]


def test_duplicate_element_names_rejected():
    try:
        PageObject("Broken", (PageObjectElement("A", (By.ID, "a")), PageObjectElement("A", (By.ID, "b"))))
    except ConfigurationError:
        pass
    else:
        raise AssertionError("duplicate element names should raise ConfigurationError")


def test_registry_lookup():
    registry = PageObjectRegistry([SEARCH_PAGE, PageObject("Empty")])
    assert len(registry) == 2
    assert "Search" in registry
    assert registry.names() == ["Search", "Empty"]
    assert registry.get_page_object("Search") is SEARCH_PAGE
    assert registry.get_element_by_name("Search", "Submit") == (By.CSS_SELECTOR, "button.search")


def test_registry_unknown_page():
    registry = PageObjectRegistry([SEARCH_PAGE])
    for lookup in (lambda: registry.get_page_object("Cart"), lambda: registry.get_element_by_name("Cart", "Pay")):
        try:
            lookup()
        except UnknownPageObjectError as e:
            assert e.page_name == "Cart"
        else:
            raise AssertionError("unknown page should raise UnknownPageObjectError")


def test_registry_rejects_duplicate_pages():
    registry = PageObjectRegistry([SEARCH_PAGE])
    try:
        registry.register(PageObject("Search"))
    except ConfigurationError as e:
        assert e.config_section == "pages"
    else:
        raise AssertionError("duplicate page names should raise ConfigurationError")
    assert registry.get_page_object("Search") is SEARCH_PAGE


def module_tests() -> bool:
    from testing.test_framework import TestSuite

    suite = TestSuite("Page Objects", "core.page_objects")
    suite.start_suite()
    suite.run_test("Element locator", test_get_element_by_name_returns_locator, expected_outcome="(By, value) returned")
    suite.run_test("Unknown element", test_unknown_element_is_reported_with_page, expected_outcome="UnknownElementError")
    suite.run_test("Initial elements", test_initially_loaded_elements_keep_declaration_order, expected_outcome="Query, Submit")
    suite.run_test("Duplicate elements", test_duplicate_element_names_rejected, expected_outcome="ConfigurationError")
    suite.run_test("Registry lookup", test_registry_lookup, expected_outcome="Pages and locators resolved")
    suite.run_test("Unknown page", test_registry_unknown_page, expected_outcome="UnknownPageObjectError")
    suite.run_test("Duplicate pages", test_registry_rejects_duplicate_pages, expected_outcome="ConfigurationError")
    return suite.finish_suite()


run_comprehensive_tests = create_standard_test_runner(module_tests)


if __name__ == "__main__":
    success = run_comprehensive_tests()
    sys.exit(0 if success else 1)
