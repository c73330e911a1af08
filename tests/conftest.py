import pytest

from models import Plan, Unit, make_default_plan
from models.defaults import default_budget, default_energy
from sample_data import create_sample_plan


@pytest.fixture
def default_plan() -> Plan:
    return make_default_plan()


@pytest.fixture
def sample_plan() -> Plan:
    return create_sample_plan()


@pytest.fixture
def empty_plan() -> Plan:
    """Standard rows with every amount at zero and no planned works."""

    plan = Plan(budget=default_budget(), energy=default_energy())
    plan.meta.name = "KÜ Test"
    plan.meta.reg_code = "80000001"
    plan.meta.address = "Testi 1, Tallinn"
    plan.meta.meeting_date = "01.03.2026"
    plan.units = [Unit(id="a", label="Korter 1", area="60"), Unit(id="b", label="Korter 2", area="40")]
    plan.allocation.basis = "area"
    return plan
