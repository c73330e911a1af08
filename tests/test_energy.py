from decimal import Decimal

from calc import forecast_energy, monthly_energy_weights
from calc.energy import energy_row
from calc.plan_constants import DEFAULT_ENERGY_PROFILE
from models import Energy, EnergyLine, HeatMonth

TOLERANCE = Decimal("1e-20")


def test_energy_row_cost_and_change():
    row = energy_row("x", "Küte", "MWh", "10", "104,5", "1000")

    assert row.cost == Decimal("1045.00")
    assert row.change == Decimal("45.00")


def test_forecast_combines_heat_and_other():
    energy = Energy(
        heat_months=[
            HeatMonth(id="1", month="Jaanuar", qty_mwh="20", price_per_mwh="100", prev_cost="1800"),
            HeatMonth(id="2", month="Veebruar", qty_mwh="10", price_per_mwh="100", prev_cost="1000"),
        ],
        other=[EnergyLine(id="w", label="Vesi", unit="m³", qty="100", price="2,5", prev_cost="300")],
    )

    forecast = forecast_energy(energy)

    assert forecast.heat.cost == Decimal("3000.00")
    assert forecast.heat.change == Decimal("200.00")
    assert forecast.other.cost == Decimal("250.00")
    assert forecast.combined.cost == Decimal("3250.00")
    assert forecast.combined.prior_cost == Decimal("3100.00")
    assert [row.label for row in forecast.heat_rows] == ["Jaanuar", "Veebruar"]


def test_blank_weights_use_default_profile():
    weights = monthly_energy_weights([None] * 12)
    total = sum(DEFAULT_ENERGY_PROFILE, start=Decimal("0"))

    assert abs(sum(weights) - 1) < TOLERANCE
    assert weights[0] == DEFAULT_ENERGY_PROFILE[0] / total
    assert weights[0] > weights[6]


def test_non_positive_weights_fall_back_to_default():
    assert monthly_energy_weights(["0"] * 12) == monthly_energy_weights(None)


def test_user_weights_are_renormalized():
    weights = monthly_energy_weights(["2", "2,0"] + [None] * 10)

    assert weights[:2] == [Decimal("0.5"), Decimal("0.5")]
    assert weights[2:] == [Decimal("0")] * 10
