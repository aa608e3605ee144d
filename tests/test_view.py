"""Tests for the transactions page state."""

import json

import httpx
import pytest

from app.web.view import TransactionsView, empty_form


def _record(id, amount, type, description="Item", **extra):
    return {"id": id, "amount": amount, "type": type, "description": description, **extra}


def _mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://ledger.test")


def _serving(listed=None, created=None, list_status=200, create_status=201, create_body=None):
    """Fake API: answers GET with ``listed`` and POST with ``created``."""
    calls = []

    def handler(request):
        calls.append(request)
        if request.method == "GET":
            if list_status != 200:
                return httpx.Response(list_status, json={"success": False, "error": "Internal server error"})
            return httpx.Response(200, json={"success": True, "data": listed or []})
        if create_body is not None:
            return httpx.Response(create_status, json=create_body)
        return httpx.Response(create_status, json={"success": True, "data": created})

    return handler, calls


class TestTotalBalance:

    def test_income_minus_expense(self):
        view = TransactionsView(_mock_client(lambda request: httpx.Response(200)))
        view.transactions = [_record("1", 100, "income"), _record("2", 40, "expense")]

        assert view.total_balance == 60

    def test_empty_list_is_zero(self):
        view = TransactionsView(_mock_client(lambda request: httpx.Response(200)))

        assert view.total_balance == 0

    def test_recomputed_when_list_changes(self):
        view = TransactionsView(_mock_client(lambda request: httpx.Response(200)))
        view.transactions = [_record("1", 10, "income")]
        view.prepend(_record("2", "2.5", "expense"))

        assert view.total_balance == 7.5


class TestLoad:

    @pytest.mark.asyncio
    async def test_initial_state(self):
        view = TransactionsView(_mock_client(lambda request: httpx.Response(200)))

        assert view.loading is True
        assert view.show_loading is True
        assert view.show_empty_state is False
        assert view.form_values == empty_form()

    @pytest.mark.asyncio
    async def test_success_replaces_list(self):
        records = [_record("2", 5, "expense"), _record("1", 50, "income")]
        handler, calls = _serving(listed=records)
        view = TransactionsView(_mock_client(handler))
        view.error = "stale"

        await view.load()

        assert view.transactions == records
        assert view.error is None
        assert view.loading is False
        assert calls[0].url.path == "/api/transactions"

    @pytest.mark.asyncio
    async def test_empty_list_shows_empty_state(self):
        handler, _ = _serving(listed=[])
        view = TransactionsView(_mock_client(handler))

        await view.load()

        assert view.show_empty_state is True

    @pytest.mark.asyncio
    async def test_server_error_is_shown(self):
        handler, _ = _serving(list_status=500)
        view = TransactionsView(_mock_client(handler))

        await view.load()

        assert view.transactions == []
        assert view.error == "Internal server error"
        assert view.loading is False
        assert view.show_error is True
        assert view.show_empty_state is False

    @pytest.mark.asyncio
    async def test_network_error_is_shown(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        view = TransactionsView(_mock_client(handler))

        await view.load()

        assert view.error == "connection refused"
        assert view.loading is False

    @pytest.mark.asyncio
    async def test_unparseable_response_is_shown(self):
        view = TransactionsView(_mock_client(lambda request: httpx.Response(200, text="<html>")))

        await view.load()

        assert view.error
        assert view.transactions == []


class TestSubmit:

    @pytest.mark.asyncio
    async def test_created_record_goes_first_and_form_resets(self):
        existing = [_record("1", 50, "income")]
        created = _record("2", 12.5, "expense", description="Coffee")
        handler, calls = _serving(listed=existing, created=created)
        view = TransactionsView(_mock_client(handler))
        await view.load()

        view.update_field("amount", "12.5")
        view.update_field("description", "Coffee")
        assert await view.submit() is True

        assert [tx["id"] for tx in view.transactions] == ["2", "1"]
        assert view.form_values == empty_form()
        assert view.submitting is False
        assert view.total_balance == 37.5
        assert json.loads(calls[-1].content) == {
            "amount": "12.5",
            "description": "Coffee",
            "category": "",
            "type": "expense",
            "date": "",
        }

    @pytest.mark.asyncio
    async def test_rejected_create_keeps_list_and_form(self):
        handler, _ = _serving(
            listed=[],
            create_status=400,
            create_body={"success": False, "error": "Missing required fields"},
        )
        view = TransactionsView(_mock_client(handler))
        await view.load()
        view.update_field("description", "No amount")

        assert await view.submit() is False

        assert view.transactions == []
        assert view.error == "Missing required fields"
        assert view.form_values["description"] == "No amount"
        assert view.submitting is False

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_fallback(self):
        handler, _ = _serving(create_status=500, create_body={"success": False})
        view = TransactionsView(_mock_client(handler))

        await view.submit()

        assert view.error == "Failed to save transaction"

    @pytest.mark.asyncio
    async def test_submit_clears_previous_error(self):
        handler, _ = _serving(created=_record("9", 1, "income"))
        view = TransactionsView(_mock_client(handler))
        view.error = "old problem"

        await view.submit()

        assert view.error is None

    @pytest.mark.asyncio
    async def test_ignored_while_already_submitting(self):
        handler, calls = _serving(created=_record("9", 1, "income"))
        view = TransactionsView(_mock_client(handler))
        view.submitting = True

        assert await view.submit() is False
        assert calls == []

    @pytest.mark.asyncio
    async def test_success_without_record_is_an_error(self):
        handler, _ = _serving(create_body={"success": True})
        view = TransactionsView(_mock_client(handler))
        view.update_field("description", "Coffee")

        assert await view.submit() is False

        assert view.error == "Failed to save transaction"
        assert view.transactions == []
        assert view.form_values["description"] == "Coffee"

    def test_unknown_form_field(self):
        view = TransactionsView(_mock_client(lambda request: httpx.Response(200)))

        with pytest.raises(KeyError):
            view.update_field("currency", "EUR")


@pytest.mark.asyncio
async def test_view_against_the_real_api(app, database):
    # ASGITransport skips the lifespan, so hand the app its database directly
    app.state.database = database
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://ledger.test") as client:
        view = TransactionsView(client)
        await view.load()
        assert view.show_empty_state is True

        for field, value in {"amount": "100", "description": "Salary", "type": "income"}.items():
            view.update_field(field, value)
        await view.submit()
        for field, value in {"amount": "40", "description": "Groceries"}.items():
            view.update_field(field, value)
        await view.submit()

        assert [tx["description"] for tx in view.transactions] == ["Groceries", "Salary"]
        assert view.total_balance == 60
        assert view.error is None
