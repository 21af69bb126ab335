"""
Generic browser steps.

Every step works on ``context.world``; pages, elements and windows are
referred to by the names registered in features/registry.py.
"""

import logging

from behave import given, then, when

logger = logging.getLogger(__name__)


@given('I open the url "{url}"')
@when('I open the url "{url}"')
def step_open_url(context, url):
    context.world.open_url(url)


@when('I click on the "{element}" element of the "{page}" page')
def step_click_element(context, element, page):
    context.world.click_element(page, element)


@when('I wait for the "{element}" element of the "{page}" page')
@then('I wait for the "{element}" element of the "{page}" page')
def step_wait_for_element(context, element, page):
    context.world.wait_for_visible(context.world.locate(page, element))


@then('the "{element}" element of the "{page}" page is not displayed')
def step_element_not_displayed(context, element, page):
    context.world.wait_for_invisible(context.world.locate(page, element))


@then('the "{element}" element of the "{page}" page contains "{text}"')
def step_element_contains(context, element, page, text):
    actual = context.world.element_text(context.world.locate(page, element))
    assert text in actual, f"{page} - {element} text {actual!r} does not contain {text!r}"


@then('the "{element}" element of the "{page}" page is present')
def step_element_present(context, element, page):
    locator = context.world.locate(page, element)
    assert context.world.is_element_present(locator), f"{page} - The {element} element is not present"


@then('the "{page}" page is displayed correctly')
def step_page_displayed(context, page):
    context.world.assert_page_displayed(page)


@when('I switch to the "{window}" window')
def step_switch_window(context, window):
    handle = context.world.switch_to_window(window)
    logger.debug(f"Active window is now '{window}' ({handle})")


@then('the "{window}" window is open')
def step_window_open(context, window):
    assert context.world.is_window_open(window), f"Window '{window}' is not open"


@then('the "{window}" window is not open')
def step_window_not_open(context, window):
    assert not context.world.is_window_open(window), f"Window '{window}' is open"


@then('the page title contains "{text}"')
def step_title_contains(context, text):
    title = context.world.current_title()
    assert text in title, f"Page title {title!r} does not contain {text!r}"


@then("I take a screenshot")
def step_take_screenshot(context):
    context.world.take_screenshot()
