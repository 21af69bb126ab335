"""
Page objects and windows known to the feature files.

Steps refer to pages and windows by the names registered here, e.g.
``When I click on the "More information" element of the "Home" page``.
"""

from selenium.webdriver.common.by import By

from browser.window_switch import WindowRegistry
from core.page_objects import PageObject, PageObjectElement, PageObjectRegistry

HOME_PAGE = PageObject(
    name="Home",
    elements=(
        PageObjectElement("Title", (By.CSS_SELECTOR, "h1"), initially_loaded=True),
        PageObjectElement("Description", (By.CSS_SELECTOR, "p"), initially_loaded=True),
        PageObjectElement("More information", (By.CSS_SELECTOR, "a[href]"), initially_loaded=True),
    ),
)

POPUP_PAGE = PageObject(
    name="Popup",
    elements=(
        PageObjectElement("Close", (By.ID, "close"), initially_loaded=True),
        PageObjectElement("Message", (By.CSS_SELECTOR, ".message")),
    ),
)

PAGE_OBJECTS = PageObjectRegistry([HOME_PAGE, POPUP_PAGE])

WINDOWS = WindowRegistry.from_mapping(
    {
        "main": r"^Example Domain$",
        "popup": r"^Popup Window$",
        "help": r"Help",
    }
)
