from decimal import Decimal

import pytest

from core.storage import plan_from_document
from models import SCHEMA_VERSION, ValidationError, detect_version, upgrade_snapshot
from models.migrations import snake_key

LEGACY_DOCUMENT = {
    "meta": {
        "name": "KÜ Vana",
        "regCode": "80011122",
        "address": "Vana 1",
        "year": 2025,
        "meetingDate": "01.02.2025",
        "protocolNo": "",
    },
    "building": {"aptCount": 2, "shareDenom": 1000, "totalArea": 120, "buildYear": "1975", "floors": "2"},
    "condition": [{"id": "roof", "label": "Katus", "status": "halb", "last": "", "next": "", "notes": ""}],
    "plannedWorks": [
        {"id": "w1", "desc": "Katuse remont", "type": "remont", "period": "juuni", "cost": 3000, "funding": "remondifond"}
    ],
    "notes": {"worksNotes": "Pakkumised küsitud"},
    "budget": {
        "income": [{"id": "repairFund", "label": "Remondifond", "prev": 0, "plan": 3600}],
        "running": [{"id": "electricCommon", "label": "Elekter", "prev": 0, "plan": 500, "group": "Energia"}],
        "invest": [{"id": "plannedWorks", "label": "Tööd", "prev": 0, "plan": 0}],
    },
    "apartments": [
        {"id": "a1", "unit": "Korter 1", "owner": "Mari", "shareNum": 250},
        {"id": "a2", "unit": "Korter 2", "owner": "Jaan", "shareNum": 750},
    ],
    "funds": {"reserveStart": 500, "reserveIn": 100, "reserveOut": 0, "repairStart": 0, "repairIn": 0, "repairOutOther": 0},
    "energy": {
        "heatMonths": [{"id": "h1", "month": "Jaanuar", "qtyMWh": 10, "pricePerMWh": 90, "prevCost": 800}],
        "other": [{"id": "waterCold", "label": "Vesi", "unit": "m³", "qty": 50, "price": 2, "prevCost": 90}],
    },
    "confirmation": {"meetingDate": "", "protocolNo": "", "retroactive": "ei", "retroactiveReason": ""},
}


def test_snake_key():
    assert snake_key("reserveStart") == "reserve_start"
    assert snake_key("qtyMWh") == "qty_mwh"
    assert snake_key("desc") == "description"
    assert snake_key("label") == "label"


def test_detect_version():
    assert detect_version({}) == SCHEMA_VERSION
    assert detect_version({"apartments": []}) == 1
    assert detect_version({"meta": {"regCode": ""}}) == 1
    assert detect_version({"schema_version": 2}) == 2


def test_legacy_document_is_upgraded():
    upgraded = upgrade_snapshot(LEGACY_DOCUMENT)

    assert upgraded["schema_version"] == SCHEMA_VERSION
    assert upgraded["units"][0]["ownership"] == Decimal("0.25")
    assert "share_denom" not in upgraded["building"]
    assert upgraded["budget"]["invest"][0]["id"] == "planned_works"


def test_upgraded_document_builds_a_plan():
    plan = plan_from_document(LEGACY_DOCUMENT)

    assert plan.meta.reg_code == "80011122"
    assert plan.meta.meeting_date == "01.02.2025"
    assert plan.building.total_area == Decimal("120")
    assert plan.planned_works[0].description == "Katuse remont"
    assert plan.planned_works[0].category == "remont"
    assert plan.works_notes == "Pakkumised küsitud"
    assert [unit.ownership for unit in plan.units] == [Decimal("0.25"), Decimal("0.75")]
    assert plan.units[0].label == "Korter 1"
    assert plan.budget.income[0].id == "repair_fund"
    assert plan.funds.reserve_start == Decimal("500")
    assert plan.energy.heat_months[0].qty_mwh == Decimal("10")
    assert plan.energy.other[0].prev_cost == Decimal("90")
    assert plan.confirmation.retroactive is False
    assert plan.allocation.basis == "share"


def test_legacy_shares_without_denominator_stay_raw():
    document = {"apartments": [{"unit": "K1", "shareNum": 40}], "building": {"shareDenom": 0}}

    upgraded = upgrade_snapshot(document)

    assert upgraded["units"][0]["ownership"] == Decimal("40")


def test_current_document_passes_through():
    assert upgrade_snapshot({"schema_version": 2, "works_notes": "x"}) == {"schema_version": 2, "works_notes": "x"}


def test_future_or_invalid_documents_are_refused():
    with pytest.raises(ValidationError):
        upgrade_snapshot({"schema_version": 9})
    with pytest.raises(ValidationError):
        upgrade_snapshot(["not", "a", "plan"])
