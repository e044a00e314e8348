"""Unit tests for the modal controller."""

import pytest

from portfolioview.dom import Page
from portfolioview.exceptions import MissingTargetError
from portfolioview.modal import ModalController, ModalState


@pytest.fixture
def page():
    return Page()


@pytest.fixture
def modal(page):
    return ModalController(page)


class TestModalController:
    """Tests for the open/close state machine."""

    def test_starts_closed(self, modal):
        assert modal.state is ModalState.CLOSED
        assert modal.root.get_attribute("aria-hidden") == "true"

    def test_open_and_close_round_trip(self, page, modal):
        modal.open("Acme <Cloud>", "<p>Body</p>", "Cloud Engineer · 2022")

        assert modal.is_open
        assert modal.root.get_attribute("aria-hidden") == "false"
        assert "is-open" in modal.root.class_list
        assert page.scroll_locked
        assert modal.title_el.text_content == "Acme <Cloud>"
        assert modal.command_el.text_content == "Cloud Engineer · 2022"
        assert modal.body_el.query_selector("p").text_content == "Body"

        modal.close()

        assert not modal.is_open
        assert modal.root.get_attribute("aria-hidden") == "true"
        assert "is-open" not in modal.root.class_list
        assert not page.scroll_locked
        assert modal.title_el.children == []
        assert modal.command_el.children == []
        assert modal.body_el.children == []

    def test_open_while_open_replaces_content(self, modal):
        modal.open("First", "<p>1</p>")
        modal.open("Second", "<p>2</p>")
        assert modal.title_el.text_content == "Second"
        assert modal.body_el.text_content == "2"
        assert modal.root.class_list.count("is-open") == 1

    def test_command_line_optional(self, modal):
        modal.open("Title", "<p>x</p>", "cmd")
        modal.open("Title", "<p>x</p>")
        assert modal.command_el.children == []

    @pytest.mark.parametrize("selector", [".modal-backdrop", ".modal-close"])
    def test_dismiss_controls_close(self, page, modal, selector):
        modal.open("Title", "<p>x</p>")
        page.click(page.require(selector))
        assert not modal.is_open

    def test_click_inside_dialog_keeps_open(self, page, modal):
        modal.open("Title", "<p>x</p>")
        page.click(page.require("#modalBody"))
        assert modal.is_open

    def test_escape_closes_from_anywhere(self, page, modal):
        modal.open("Title", "<p>x</p>")
        page.press_key(page.require("#projectsGrid"), "Escape")
        assert not modal.is_open

    def test_other_keys_do_not_close(self, page, modal):
        modal.open("Title", "<p>x</p>")
        page.press_key(page.require("#projectsGrid"), "Enter")
        assert modal.is_open

    def test_close_when_closed_is_harmless(self, page, modal):
        modal.close()
        assert modal.state is ModalState.CLOSED
        assert not page.scroll_locked


def test_missing_root_raises():
    with pytest.raises(MissingTargetError):
        ModalController(Page("<main></main>"))


def test_missing_region_raises():
    markup = '<div id="modal"><h3 id="modalTitle"></h3><div id="modalBody"></div></div>'
    with pytest.raises(MissingTargetError) as exc_info:
        ModalController(Page(markup))
    assert exc_info.value.selector == "#modalCmd"
