"""Unit tests for page_actions.page_actions module."""

import asyncio

import pytest
from requests.exceptions import ConnectionError

from src.models.notification import Notification, NotificationKind
from src.models.page import Page
from src.page_actions.page_actions import PageActions, error_message
from src.page_actions.validator import DEFAULT_RULES, Validator, required_metadata
from src.pages_client.config import ClientConfig
from src.pages_client.errors import PageNotFoundError, TransportError
from tests.fixtures.sample_pages import API_URL, NEW_PAGE_DRAFT, PAGE_DOCUMENT
from tests.helpers.fake_transport import AsyncFakeTransport, FakeTransport

PAGE = Page.from_api(PAGE_DOCUMENT)


def make_actions(transport, sink, validator=None):
    return PageActions(ClientConfig(base_url=API_URL, transport=transport), sink, validator)


class TestErrorMessage:
    """Test cases for error_message normalization."""

    def test_transport_error(self):
        assert error_message(TransportError("something awful happened")) == "something awful happened"

    def test_mapping_with_message(self):
        assert error_message({"message": "something awful happened"}) == "something awful happened"

    def test_mapping_with_error_key(self):
        assert error_message({"error": "Disk full"}) == "Disk full"

    def test_object_with_message_attribute(self):
        class Failure:
            message = "something awful happened"

        assert error_message(Failure()) == "something awful happened"

    def test_plain_exception(self):
        assert error_message(ConnectionError("Connection refused")) == "Connection refused"

    def test_non_string_message_attribute_falls_back_to_str(self):
        error = ValueError("bad value")
        error.message = {"code": 1}

        assert error_message(error) == "bad value"

    def test_empty_exception_uses_class_name(self):
        assert error_message(RuntimeError()) == "RuntimeError"


class TestFetchPages:
    """Test cases for PageActions.fetch_pages."""

    @pytest.mark.asyncio
    async def test_success_sequence(self, sink):
        """Emits FETCH_PAGES_REQUEST then FETCH_PAGES_SUCCESS with the pages."""
        transport = FakeTransport(responses={("GET", "/pages"): [PAGE_DOCUMENT]})

        await make_actions(transport, sink).fetch_pages()

        assert sink.notifications == [
            Notification(NotificationKind.FETCH_PAGES_REQUEST),
            Notification(NotificationKind.FETCH_PAGES_SUCCESS, pages=(PAGE,)),
        ]
        assert transport.calls == [("GET", "/pages", None)]

    @pytest.mark.asyncio
    async def test_preserves_server_order(self, sink):
        documents = [
            {"name": "b.md", "path": "b.md"},
            {"name": "a.md", "path": "a.md"},
            {"name": "b.md", "path": "b.md"},
        ]
        transport = FakeTransport(responses={("GET", "/pages"): documents})

        await make_actions(transport, sink).fetch_pages()

        pages = sink.notifications[-1].pages
        assert [page.name for page in pages] == ["b.md", "a.md", "b.md"]

    @pytest.mark.asyncio
    async def test_request_emitted_before_transport_call(self, sink):
        """The request notification is already on the sink when the call starts."""
        seen = []

        class ObservingTransport(FakeTransport):
            def get(self, path):
                seen.extend(sink.kinds())
                return []

        await make_actions(ObservingTransport(), sink).fetch_pages()

        assert seen == [NotificationKind.FETCH_PAGES_REQUEST]

    @pytest.mark.asyncio
    async def test_failure_sequence(self, sink):
        transport = FakeTransport(errors={
            ("GET", "/pages"): TransportError("something awful happened")
        })

        result = await make_actions(transport, sink).fetch_pages()

        assert result is None
        assert sink.notifications == [
            Notification(NotificationKind.FETCH_PAGES_REQUEST),
            Notification(NotificationKind.FETCH_PAGES_FAILURE, error="something awful happened"),
        ]

    @pytest.mark.asyncio
    async def test_malformed_response_is_a_failure(self, sink):
        transport = FakeTransport(responses={("GET", "/pages"): {"pages": []}})

        await make_actions(transport, sink).fetch_pages()

        assert sink.notifications[-1] == Notification(
            NotificationKind.FETCH_PAGES_FAILURE,
            error="Expected a list of pages, got dict",
        )

    @pytest.mark.asyncio
    async def test_async_transport(self, sink):
        transport = AsyncFakeTransport(responses={("GET", "/pages"): [PAGE_DOCUMENT]})

        await make_actions(transport, sink).fetch_pages()

        assert sink.kinds() == [
            NotificationKind.FETCH_PAGES_REQUEST,
            NotificationKind.FETCH_PAGES_SUCCESS,
        ]


class TestFetchPage:
    """Test cases for PageActions.fetch_page."""

    @pytest.mark.asyncio
    async def test_success_sequence(self, sink):
        transport = FakeTransport(responses={("GET", "/pages/about.md"): PAGE_DOCUMENT})

        await make_actions(transport, sink).fetch_page("about.md")

        assert sink.notifications == [
            Notification(NotificationKind.FETCH_PAGE_REQUEST),
            Notification(NotificationKind.FETCH_PAGE_SUCCESS, page=PAGE),
        ]
        assert transport.calls == [("GET", "/pages/about.md", None)]

    @pytest.mark.asyncio
    async def test_failure_sequence(self, sink):
        transport = FakeTransport(errors={
            ("GET", "/pages/missing.md"): PageNotFoundError("missing.md")
        })

        await make_actions(transport, sink).fetch_page("missing.md")

        assert sink.notifications == [
            Notification(NotificationKind.FETCH_PAGE_REQUEST),
            Notification(NotificationKind.FETCH_PAGE_FAILURE, error="Page missing.md not found"),
        ]

    @pytest.mark.asyncio
    async def test_non_object_response_is_a_failure(self, sink):
        transport = FakeTransport(responses={("GET", "/pages/about.md"): None})

        await make_actions(transport, sink).fetch_page("about.md")

        assert sink.kinds()[-1] == NotificationKind.FETCH_PAGE_FAILURE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_id", ["", "   ", None])
    async def test_empty_id_is_a_failure_without_request(self, sink, page_id):
        transport = FakeTransport()

        await make_actions(transport, sink).fetch_page(page_id)

        assert sink.notifications == [
            Notification(NotificationKind.FETCH_PAGE_REQUEST),
            Notification(NotificationKind.FETCH_PAGE_FAILURE, error="page_id cannot be empty"),
        ]
        assert transport.calls == []


class TestDeletePage:
    """Test cases for PageActions.delete_page."""

    @pytest.mark.asyncio
    async def test_success_emits_single_notification(self, sink):
        """No request notification, only DELETE_PAGE_SUCCESS with the id."""
        transport = FakeTransport(responses={("DELETE", "/pages/about.md"): {"message": "Deleted"}})

        await make_actions(transport, sink).delete_page("about.md")

        assert sink.notifications == [
            Notification(NotificationKind.DELETE_PAGE_SUCCESS, id="about.md"),
        ]
        assert transport.calls == [("DELETE", "/pages/about.md", None)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        TransportError("something awful happened"),
        ConnectionError("Connection refused"),
        KeyError("name"),
        RuntimeError(),
    ])
    async def test_failure_emits_single_failure_for_any_error_shape(self, sink, error):
        transport = FakeTransport(errors={("DELETE", "/pages/about.md"): error})

        await make_actions(transport, sink).delete_page("about.md")

        assert len(sink.notifications) == 1
        notification = sink.notifications[0]
        assert notification.kind is NotificationKind.DELETE_PAGE_FAILURE
        assert isinstance(notification.error, str)
        assert notification.error

    @pytest.mark.asyncio
    async def test_failure_carries_transport_message(self, sink):
        transport = FakeTransport(errors={
            ("DELETE", "/pages/about.md"): TransportError("something awful happened")
        })

        await make_actions(transport, sink).delete_page("about.md")

        assert sink.notifications == [
            Notification(NotificationKind.DELETE_PAGE_FAILURE, error="something awful happened"),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_id", ["", "   ", None])
    async def test_empty_id_is_a_failure_without_request(self, sink, page_id):
        transport = FakeTransport()

        await make_actions(transport, sink).delete_page(page_id)

        assert sink.notifications == [
            Notification(NotificationKind.DELETE_PAGE_FAILURE, error="page_id cannot be empty"),
        ]
        assert transport.calls == []


class TestPutPage:
    """Test cases for PageActions.put_page."""

    @pytest.mark.asyncio
    async def test_validation_error_skips_network(self, sink):
        """A draft without name or path emits only VALIDATION_ERROR."""
        transport = FakeTransport()

        await make_actions(transport, sink).put_page({}, "about.md")

        assert sink.notifications == [
            Notification(
                NotificationKind.VALIDATION_ERROR,
                errors=("The filename is required.",)
            ),
        ]
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_update_targets_given_id(self, sink):
        transport = FakeTransport(responses={("PUT", "/pages/about.md"): PAGE_DOCUMENT})

        await make_actions(transport, sink).put_page(PAGE, "about.md")

        assert sink.notifications == [
            Notification(NotificationKind.CLEAR_ERRORS),
            Notification(NotificationKind.PUT_PAGE_SUCCESS, page=PAGE),
        ]
        assert transport.calls == [("PUT", "/pages/about.md", PAGE.to_payload())]

    @pytest.mark.asyncio
    async def test_given_id_takes_precedence_over_draft_name(self, sink):
        draft = Page(name="renamed.md", path="renamed.md", metadata={"title": "About"})
        transport = FakeTransport(responses={("PUT", "/pages/about.md"): PAGE_DOCUMENT})

        await make_actions(transport, sink).put_page(draft, "about.md")

        assert transport.calls[0][1] == "/pages/about.md"
        assert sink.kinds()[-1] == NotificationKind.PUT_PAGE_SUCCESS

    @pytest.mark.asyncio
    async def test_create_targets_draft_path(self, sink):
        saved = dict(PAGE_DOCUMENT, name="new-page.md", path="new-page.md")
        transport = FakeTransport(responses={("PUT", "/pages/new-page.md"): saved})

        await make_actions(transport, sink).put_page(NEW_PAGE_DRAFT)

        assert transport.calls == [(
            "PUT",
            "/pages/new-page.md",
            {
                "front_matter": {"title": "New Page", "layout": "page"},
                "raw_content": "# New Page\n",
                "path": "new-page.md",
            },
        )]
        assert sink.notifications == [
            Notification(NotificationKind.CLEAR_ERRORS),
            Notification(NotificationKind.PUT_PAGE_SUCCESS, page=Page.from_api(saved)),
        ]

    @pytest.mark.asyncio
    async def test_name_only_draft_updates_that_name(self, sink):
        transport = FakeTransport(responses={("PUT", "/pages/about.md"): PAGE_DOCUMENT})

        await make_actions(transport, sink).put_page(Page(name="about.md"))

        assert transport.calls[0][1] == "/pages/about.md"

    @pytest.mark.asyncio
    async def test_blank_path_falls_back_to_name(self, sink):
        transport = FakeTransport(responses={("PUT", "/pages/about.md"): PAGE_DOCUMENT})

        await make_actions(transport, sink).put_page(Page(name="about.md", path="  "))

        assert transport.calls[0][1] == "/pages/about.md"
        assert sink.kinds()[-1] == NotificationKind.PUT_PAGE_SUCCESS

    @pytest.mark.asyncio
    async def test_failure_sequence(self, sink):
        transport = FakeTransport(errors={
            ("PUT", "/pages/about.md"): TransportError("something awful happened")
        })

        await make_actions(transport, sink).put_page(PAGE, "about.md")

        assert sink.notifications == [
            Notification(NotificationKind.CLEAR_ERRORS),
            Notification(NotificationKind.PUT_PAGE_FAILURE, error="something awful happened"),
        ]

    @pytest.mark.asyncio
    async def test_clear_errors_emitted_before_request(self, sink):
        seen = []

        class ObservingTransport(FakeTransport):
            def put(self, path, payload):
                seen.extend(sink.kinds())
                return PAGE_DOCUMENT

        await make_actions(ObservingTransport(), sink).put_page(PAGE, "about.md")

        assert seen == [NotificationKind.CLEAR_ERRORS]

    @pytest.mark.asyncio
    async def test_custom_validator(self, sink):
        validator = Validator(DEFAULT_RULES + (
            required_metadata("title", "The title is required."),
        ))
        transport = FakeTransport()

        await make_actions(transport, sink, validator).put_page({"path": "untitled.md"})

        assert sink.notifications == [
            Notification(
                NotificationKind.VALIDATION_ERROR,
                errors=("The title is required.",)
            ),
        ]
        assert transport.calls == []


class TestConcurrentOperations:
    """Operations on one PageActions instance are independent."""

    @pytest.mark.asyncio
    async def test_each_operation_completes(self):
        transport = AsyncFakeTransport(
            responses={
                ("GET", "/pages"): [PAGE_DOCUMENT],
                ("GET", "/pages/about.md"): PAGE_DOCUMENT,
            },
            errors={("DELETE", "/pages/gone.md"): PageNotFoundError("gone.md")},
        )
        received = []
        actions = make_actions(transport, received.append)

        await asyncio.gather(
            actions.fetch_pages(),
            actions.fetch_page("about.md"),
            actions.delete_page("gone.md"),
        )

        kinds = [n.kind for n in received]
        assert len(received) == 5
        assert kinds.index(NotificationKind.FETCH_PAGES_REQUEST) < \
            kinds.index(NotificationKind.FETCH_PAGES_SUCCESS)
        assert kinds.index(NotificationKind.FETCH_PAGE_REQUEST) < \
            kinds.index(NotificationKind.FETCH_PAGE_SUCCESS)
        assert NotificationKind.DELETE_PAGE_FAILURE in kinds
