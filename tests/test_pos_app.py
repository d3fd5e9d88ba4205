import asyncio
import threading

import pytest
from textual.containers import Horizontal
from textual.widgets import Static

from danclean.amount_modal import AmountModal
from danclean.customer_modal import CustomerModal
from danclean.dates import InvalidTimeZoneError
from danclean.models import OrderPaymentMethod, OrderPaymentStatus, OrderType, Role, User
from danclean.payment_modal import PaymentMethodModal
from danclean.pos_app import DanCleanApp
from danclean.session import EMPTY_TEXT, LOADING_TEXT, Empty, Failed, Ready

USER = User(id="u-1", email="ana@danclean.mx", name="Ana", last_name="Garza", role=Role.ADMIN)


def _run(scenario):
    asyncio.run(scenario())


async def _settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


def _visible(app, selector, widget_type=Static):
    return app.query_one(selector, widget_type).display


def test_pending_query_shows_loading_only():
    release = threading.Event()

    def slow_query():
        release.wait(timeout=5)
        return Ready(USER)

    async def scenario():
        app = DanCleanApp(current_user_query=slow_query)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.page_message == LOADING_TEXT
            assert _visible(app, "#page-gate")
            assert not _visible(app, "#home")
            assert not _visible(app, "#main-layout", Horizontal)

            release.set()
            await _settle(app, pilot)
            assert _visible(app, "#main-layout", Horizontal)

    _run(scenario)


def test_failed_query_shows_error_message():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Failed("Network error"))
        async with app.run_test() as pilot:
            await _settle(app, pilot)
            assert app.page_message == "Error: Network error"
            assert not _visible(app, "#main-layout", Horizontal)

    _run(scenario)


def test_empty_query_shows_no_data():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Empty())
        async with app.run_test() as pilot:
            await _settle(app, pilot)
            assert app.page_message == EMPTY_TEXT
            assert not _visible(app, "#home")

    _run(scenario)


def test_ready_query_shows_home_and_pos():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)
            assert "Dan Clean App" in app.page_message
            assert "Ana Garza" in app.page_message
            assert _visible(app, "#home")
            assert not _visible(app, "#page-gate")
            assert _visible(app, "#main-layout", Horizontal)

    _run(scenario)


def test_employee_lands_on_counter_without_home():
    employee = User(id="u-2", email="luis@danclean.mx", name="Luis", last_name="Peña", role=Role.EMPLOYEE)

    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(employee))
        async with app.run_test() as pilot:
            await _settle(app, pilot)
            assert "Dan Clean App" not in app.page_message
            assert app.page_message == "Punto de Venta"
            assert not _visible(app, "#home")
            assert not _visible(app, "#page-gate")
            assert _visible(app, "#main-layout", Horizontal)

    _run(scenario)


def test_unknown_business_zone_fails_at_startup(monkeypatch):
    monkeypatch.setenv("DANCLEAN_TIME_ZONE", "Nope/Zone")

    with pytest.raises(InvalidTimeZoneError):
        DanCleanApp(current_user_query=lambda: Ready(USER))


def test_keys_are_ignored_until_ready():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Failed("Network error"))
        async with app.run_test() as pilot:
            await _settle(app, pilot)
            await pilot.press("i")
            assert not isinstance(app.screen, AmountModal)
            assert app.form.order_type is None

    _run(scenario)


def test_ironing_order_checkout():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("i")
            assert isinstance(app.screen, AmountModal)
            await pilot.press("1", "3", "enter")
            await pilot.pause()
            assert app.form.order_type is OrderType.IRONING
            assert app.form.ironing_quantity == 13
            assert app.form.calculate_total() == 154

            await pilot.press("ctrl+s")
            assert app.system_status == "Captura el cliente (N)"

            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.screen, CustomerModal)
            await pilot.press(*"Luis", "enter")
            await pilot.pause()
            assert app.form.customer == "Luis"

            await pilot.press("ctrl+s")
            assert app.system_status == "Elige el método de pago (P)"
            assert app.form.ironing_quantity == 13

            await pilot.press("p")
            assert isinstance(app.screen, PaymentMethodModal)
            await pilot.press("down", "enter")
            await pilot.pause()
            assert app.form.payment_method is OrderPaymentMethod.CARD

            await pilot.press("ctrl+s")
            assert isinstance(app.screen, AmountModal)
            assert app.screen.max_value == 154
            assert app.screen.digits == "154"
            await pilot.press("enter")
            await pilot.pause()

            assert app.system_status == "Luis: Cobrado $154.00 de $154.00 (Tarjeta) Pagado"
            assert app.last_checkout.payment_status is OrderPaymentStatus.PAID
            assert app.form.order_type is None
            assert app.form.customer is None

    _run(scenario)


def test_cash_checkout_reports_change():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("n")
            await pilot.pause()
            await pilot.press(*"Ana", "enter")
            await pilot.pause()
            await pilot.press("c", *"traje", "enter")
            await pilot.press("2", "enter")
            await pilot.pause()
            app.action_cancel_active_mode()
            await pilot.press("p", "enter")
            await pilot.pause()
            assert app.form.payment_method is OrderPaymentMethod.CASH

            await pilot.press("ctrl+s")
            modal = app.screen
            assert isinstance(modal, AmountModal)
            assert modal.max_value is None
            await pilot.press("backspace", "backspace", "5", "0")
            assert modal.current_value() == 50
            assert modal.preview(50) == "Pagado, cambio $20.00"
            assert modal.preview(10) == "Pago Parcial, resta $20.00"
            await pilot.press("enter")
            await pilot.pause()

            summary = app.last_checkout
            assert summary.total == 30
            assert summary.total_paid == 30
            assert summary.change == 20
            assert app.system_status.endswith("Pagado, cambio $20.00")

    _run(scenario)


def test_cancelled_payment_keeps_order():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("n")
            await pilot.pause()
            await pilot.press(*"Ana", "enter")
            await pilot.pause()
            await pilot.press("i", "2", "enter")
            await pilot.pause()
            await pilot.press("p", "enter")
            await pilot.pause()

            await pilot.press("ctrl+s")
            assert isinstance(app.screen, AmountModal)
            await pilot.press("escape")
            await pilot.pause()

            assert app.system_status == "Cobro cancelado"
            assert app.last_checkout is None
            assert app.form.ironing_quantity == 2

    _run(scenario)


def test_amount_modal_enforces_bounds_and_previews_subtotal():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("i")
            modal = app.screen
            assert isinstance(modal, AmountModal)

            await pilot.press("0", "enter")
            assert app.screen is modal
            assert modal.error == "El valor debe ser de 1 a 999."

            await pilot.press("backspace", *"1234")
            assert modal.digits == "123"
            assert modal.preview(12) == "Subtotal: $140.00"

            await pilot.press("backspace", "backspace", "backspace", "up", "up")
            assert modal.digits == "2"
            await pilot.press("down", "enter")
            await pilot.pause()
            assert app.form.ironing_quantity == 1

    _run(scenario)


def test_blank_customer_name_is_not_accepted():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("n")
            await pilot.pause()
            await pilot.press("enter")
            assert isinstance(app.screen, CustomerModal)
            await pilot.press("escape")
            await pilot.pause()
            assert app.form.customer is None

    _run(scenario)


def test_cleaning_search_adds_priced_items():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("c")
            assert app.input_state == "active"
            await pilot.press(*"traje")
            assert app.search_query == "traje"
            await pilot.press("enter")
            assert isinstance(app.screen, AmountModal)
            await pilot.press("2", "enter")
            await pilot.pause()

            assert [(e.item_name, e.quantity, e.price) for e in app.form.cleaning_items] == [("Traje", 2, 15.0)]
            assert app.form.calculate_total() == 30

            app.action_cancel_active_mode()
            await pilot.pause()
            assert app.input_state == "normal"

            await pilot.press("d")
            assert app.form.cleaning_items == []
            assert app.form.order_type is OrderType.CLEANING

    _run(scenario)


def test_cancelled_quantity_adds_nothing():
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Ready(USER))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            await pilot.press("c", "v", "enter")
            assert isinstance(app.screen, AmountModal)
            await pilot.press("escape")
            await pilot.pause()

            assert app.form.cleaning_items == []

    _run(scenario)


def test_debug_log_records_events(debug_log_in_tmp):
    async def scenario():
        app = DanCleanApp(current_user_query=lambda: Empty())
        async with app.run_test() as pilot:
            await _settle(app, pilot)

    _run(scenario)

    lines = debug_log_in_tmp.read_text(encoding="utf-8").splitlines()
    assert any(line.endswith("app_init") for line in lines)
    assert any("page_state state=Empty" in line for line in lines)
