from decimal import Decimal

from streamlit.testing.v1 import AppTest

from ui.widgets import _rows_differ, _same_value


def test_comma_amount_matches_stored_value():
    assert _same_value("12,5", Decimal("12.5"))
    assert _same_value(" 1 200 ", Decimal("1200"))
    assert not _same_value("12,6", Decimal("12.5"))


def test_blank_optional_amount_matches_none():
    assert _same_value("", None)
    assert not _same_value("0", None)


def test_text_is_compared_as_typed():
    assert _same_value("KÜ Kase 7", "KÜ Kase 7")
    assert not _same_value("KÜ Kase 7 ", "KÜ Kase 7")
    assert _same_value("2026", 2026)


def test_table_with_comma_amounts_is_unchanged():
    before = [{"id": "a", "label": "Remondifond", "prev": Decimal("0"), "plan": Decimal("12.5")}]
    after = [{"id": "a", "label": "Remondifond", "prev": None, "plan": "12,5"}]

    assert not _rows_differ(before, after, ["id", "label", "prev", "plan"])


def test_table_edits_are_detected():
    before = [{"id": "a", "label": "Korter 1", "area": Decimal("60"), "include_in_allocation": True}]
    columns = ["id", "label", "area", "include_in_allocation"]

    assert _rows_differ(before, [{**before[0], "area": "61"}], columns)
    assert _rows_differ(before, [{**before[0], "include_in_allocation": False}], columns)
    assert _rows_differ(before, [{"label": "Korter 1", "area": "60", "include_in_allocation": True}], columns)
    assert _rows_differ(before, [], columns)


def _energy_weights_app():
    from models import make_default_plan
    from views.cashflow import _render_energy_weights

    _render_energy_weights(make_default_plan())


def test_energy_weight_inputs_are_labelled_by_month():
    app = AppTest.from_function(_energy_weights_app).run()

    labels = sorted(widget.label for widget in app.text_input)

    assert not app.exception
    assert len(labels) == 12
    assert "Jaanuar" in labels
    assert "Detsember" in labels
