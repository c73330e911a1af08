"""Dataclass-based models for the condominium annual financial plan."""
from __future__ import annotations

from dataclasses import MISSING, asdict, dataclass, field, fields, replace
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence, Tuple, TypeVar
from uuid import uuid4

from .numbers import parse_amount, parse_optional_amount
from .schedule import Schedule, UNSCHEDULED, parse_schedule

SCHEMA_VERSION = 2

PLANNED_WORKS_LINE_ID = "planned_works"
PLANNED_WORKS_LINE_LABEL = "Remondifondist finantseeritavad tööd (vt „Maja tervis“)"
ENERGY_GROUP = "Energia"

UNIT_TYPES: Tuple[str, ...] = ("korter", "äripind", "üldruum")
CONDITION_STATUSES: Tuple[str, ...] = ("hea", "jalgida", "halb")
WORK_CATEGORIES: Tuple[str, ...] = ("hooldus", "remont", "uuendus")
FUNDING_SOURCES: Tuple[str, ...] = ("jooksev", "remondifond", "reserv", "laen", "toetus")
ALLOCATION_BASES: Tuple[str, ...] = ("area", "share")
PLAN_STATUSES: Tuple[str, ...] = ("draft", "submitted", "approved", "amended")
INCOME_POLICIES: Tuple[str, ...] = ("even", "seasonal")
RUNNING_POLICIES: Tuple[str, ...] = ("even", "winter")

_TRUE_WORDS = {"1", "true", "jah", "yes", "on"}

T = TypeVar("T")


def new_id() -> str:
    return uuid4().hex[:8]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return bool(value)


def _as_year(value: Any) -> int:
    year = int(parse_amount(value))
    return year if year > 0 else date.today().year


def _convert_for_dump(value: Any, *, json_mode: bool) -> Any:
    if isinstance(value, Decimal):
        return str(value) if json_mode else Decimal(value)
    if isinstance(value, list):
        return [_convert_for_dump(item, json_mode=json_mode) for item in value]
    if isinstance(value, dict):
        return {key: _convert_for_dump(val, json_mode=json_mode) for key, val in value.items()}
    return value


class ValidationError(Exception):
    """Structural problems found while reading a plan document."""

    def __init__(self, errors: List[Dict[str, Any]]) -> None:
        super().__init__("Validation failed")
        self._errors = errors

    def errors(self) -> List[Dict[str, Any]]:
        return self._errors


class ModelMixin:
    """Provide ``model_dump``/``model_copy`` helpers for the plan dataclasses."""

    def model_dump(self, mode: str | None = None) -> Dict[str, Any]:
        data = asdict(self)  # type: ignore[call-overload]
        return _convert_for_dump(data, json_mode=(mode == "json"))

    def model_copy(self, deep: bool = False):  # type: ignore[override]
        if not deep:
            return replace(self)  # type: ignore[type-var]
        return self.__class__.from_dict(self.model_dump())  # type: ignore[attr-defined]


def _require_mapping(data: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError([{"loc": tuple(), "msg": f"{label} peab olema sõnastik."}])
    return data


def _prefixed(prefix: Tuple[Any, ...], exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": prefix + tuple(detail.get("loc", ())), "msg": detail.get("msg", "Vigane väärtus.")}
        for detail in exc.errors()
    ]


def _choice(
    data: Mapping[str, Any],
    key: str,
    options: Sequence[str],
    default: str,
    errors: List[Dict[str, Any]],
) -> str:
    value = data.get(key, default)
    if value in (None, ""):
        return default
    value = str(value)
    if value not in options:
        errors.append({"loc": (key,), "msg": f"Lubatud väärtused: {', '.join(options)}."})
        return default
    return value


def _rows(
    data: Mapping[str, Any],
    key: str,
    factory: Callable[[Any], T],
    errors: List[Dict[str, Any]],
) -> List[T]:
    raw_rows = data.get(key, [])
    if raw_rows is None:
        return []
    if not isinstance(raw_rows, Iterable) or isinstance(raw_rows, (str, bytes, Mapping)):
        errors.append({"loc": (key,), "msg": f"{key} peab olema loend."})
        return []
    rows: List[T] = []
    for index, raw in enumerate(raw_rows):
        try:
            rows.append(factory(raw))
        except ValidationError as exc:
            errors.extend(_prefixed((key, index), exc))
    return rows


def _section(
    data: Mapping[str, Any],
    key: str,
    factory: Callable[[Any], T],
    fallback: Callable[[], T],
    errors: List[Dict[str, Any]],
) -> T:
    if key not in data or data.get(key) is None:
        return fallback()
    try:
        return factory(data[key])
    except ValidationError as exc:
        errors.extend(_prefixed((key,), exc))
        return fallback()


def _text_kwargs(cls: type, data: Mapping[str, Any], names: Iterable[str]) -> Dict[str, str]:
    defaults = {f.name: f.default if f.default is not MISSING else "" for f in fields(cls)}
    return {name: _as_text(data.get(name, defaults.get(name, ""))) for name in names}


@dataclass
class Meta(ModelMixin):
    """Association identity and fiscal-year header."""

    name: str = ""
    reg_code: str = ""
    address: str = ""
    board: str = ""
    year: int = field(default_factory=lambda: date.today().year)
    period_start: str = ""
    period_end: str = ""
    meeting_date: str = ""
    protocol_no: str = ""

    def __post_init__(self) -> None:
        for name in ("name", "reg_code", "address", "board", "period_start", "period_end", "meeting_date", "protocol_no"):
            setattr(self, name, _as_text(getattr(self, name)))
        self.year = _as_year(self.year)

    @classmethod
    def from_dict(cls, data: Any) -> "Meta":
        if isinstance(data, Meta):
            return data
        data = _require_mapping(data, "Ühingu andmed")
        kwargs: Dict[str, Any] = _text_kwargs(
            cls,
            data,
            ("name", "reg_code", "address", "board", "period_start", "period_end", "meeting_date", "protocol_no"),
        )
        return cls(year=data.get("year", date.today().year), **kwargs)


@dataclass
class Building(ModelMixin):
    apt_count: int = 0
    total_area: Decimal = Decimal("0")
    build_year: str = ""
    floors: str = ""

    def __post_init__(self) -> None:
        self.apt_count = int(parse_amount(self.apt_count))
        self.total_area = parse_amount(self.total_area)
        self.build_year = _as_text(self.build_year)
        self.floors = _as_text(self.floors)

    @classmethod
    def from_dict(cls, data: Any) -> "Building":
        if isinstance(data, Building):
            return data
        data = _require_mapping(data, "Maja andmed")
        return cls(
            apt_count=data.get("apt_count", 0),
            total_area=data.get("total_area", 0),
            build_year=data.get("build_year", ""),
            floors=data.get("floors", ""),
        )


@dataclass
class ConditionItem(ModelMixin):
    """One building part in the condition survey."""

    id: str
    label: str
    status: str = "hea"
    last: str = ""
    next: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "ConditionItem":
        if isinstance(data, ConditionItem):
            return data
        data = _require_mapping(data, "Seisukorra rida")
        errors: List[Dict[str, Any]] = []
        status = _choice(data, "status", CONDITION_STATUSES, "hea", errors)
        if errors:
            raise ValidationError(errors)
        return cls(
            id=_as_text(data.get("id")) or new_id(),
            status=status,
            **_text_kwargs(cls, data, ("label", "last", "next", "notes")),
        )


@dataclass
class PlannedWork(ModelMixin):
    """A scheduled maintenance, repair or upgrade item."""

    id: str = field(default_factory=new_id)
    description: str = ""
    category: str = "remont"
    period: str = ""
    cost: Decimal = Decimal("0")
    funding: str = "remondifond"
    schedule: Schedule = field(init=False, default=UNSCHEDULED)

    def __post_init__(self) -> None:
        self.description = _as_text(self.description)
        self.period = _as_text(self.period)
        self.cost = parse_amount(self.cost)
        self.schedule = parse_schedule(self.period)

    @classmethod
    def from_dict(cls, data: Any) -> "PlannedWork":
        if isinstance(data, PlannedWork):
            return data
        data = _require_mapping(data, "Planeeritud töö")
        errors: List[Dict[str, Any]] = []
        category = _choice(data, "category", WORK_CATEGORIES, "remont", errors)
        funding = _choice(data, "funding", FUNDING_SOURCES, "remondifond", errors)
        if errors:
            raise ValidationError(errors)
        return cls(
            id=_as_text(data.get("id")) or new_id(),
            description=data.get("description", ""),
            category=category,
            period=data.get("period", ""),
            cost=data.get("cost", 0),
            funding=funding,
        )


@dataclass
class BudgetLine(ModelMixin):
    """Income, running-expense or investment row."""

    id: str
    label: str
    prev: Decimal = Decimal("0")
    plan: Decimal = Decimal("0")
    group: str = ""

    def __post_init__(self) -> None:
        self.label = _as_text(self.label)
        self.group = _as_text(self.group)
        self.prev = parse_amount(self.prev)
        self.plan = parse_amount(self.plan)

    @classmethod
    def from_dict(cls, data: Any) -> "BudgetLine":
        if isinstance(data, BudgetLine):
            return data
        data = _require_mapping(data, "Eelarve rida")
        return cls(
            id=_as_text(data.get("id")) or new_id(),
            label=data.get("label", ""),
            prev=data.get("prev", 0),
            plan=data.get("plan", 0),
            group=data.get("group", ""),
        )


@dataclass
class Budget(ModelMixin):
    income: List[BudgetLine] = field(default_factory=list)
    running: List[BudgetLine] = field(default_factory=list)
    invest: List[BudgetLine] = field(default_factory=list)

    def __post_init__(self) -> None:
        # The planned-works line carries the sum of the works and cannot be removed.
        if not any(line.id == PLANNED_WORKS_LINE_ID for line in self.invest):
            self.invest = [BudgetLine(id=PLANNED_WORKS_LINE_ID, label=PLANNED_WORKS_LINE_LABEL), *self.invest]

    @classmethod
    def from_dict(cls, data: Any) -> "Budget":
        if isinstance(data, Budget):
            return data
        data = _require_mapping(data, "Eelarve")
        errors: List[Dict[str, Any]] = []
        income = _rows(data, "income", BudgetLine.from_dict, errors)
        running = _rows(data, "running", BudgetLine.from_dict, errors)
        invest = _rows(data, "invest", BudgetLine.from_dict, errors)
        if errors:
            raise ValidationError(errors)
        return cls(income=income, running=running, invest=invest)


@dataclass
class Unit(ModelMixin):
    """A condominium sub-unit ("hooneosa")."""

    id: str = field(default_factory=new_id)
    label: str = ""
    unit_type: str = "korter"
    owner: str = ""
    area: Decimal = Decimal("0")
    ownership: Decimal = Decimal("0")
    include_in_allocation: bool = True

    def __post_init__(self) -> None:
        self.label = _as_text(self.label)
        self.owner = _as_text(self.owner)
        self.area = parse_amount(self.area)
        self.ownership = parse_amount(self.ownership)
        self.include_in_allocation = _as_bool(self.include_in_allocation)

    @classmethod
    def from_dict(cls, data: Any) -> "Unit":
        if isinstance(data, Unit):
            return data
        data = _require_mapping(data, "Hooneosa")
        errors: List[Dict[str, Any]] = []
        unit_type = _choice(data, "unit_type", UNIT_TYPES, "korter", errors)
        if errors:
            raise ValidationError(errors)
        return cls(
            id=_as_text(data.get("id")) or new_id(),
            label=data.get("label", ""),
            unit_type=unit_type,
            owner=data.get("owner", ""),
            area=data.get("area", 0),
            ownership=data.get("ownership", 0),
            include_in_allocation=data.get("include_in_allocation", True),
        )


@dataclass
class AllocationConfig(ModelMixin):
    basis: str = "share"
    bylaw_deviation: bool = False
    deviation_note: str = ""

    def __post_init__(self) -> None:
        if self.basis not in ALLOCATION_BASES:
            raise ValueError(f"Jaotuse alus peab olema üks järgmistest: {', '.join(ALLOCATION_BASES)}.")
        self.bylaw_deviation = _as_bool(self.bylaw_deviation)
        self.deviation_note = _as_text(self.deviation_note)

    @classmethod
    def from_dict(cls, data: Any) -> "AllocationConfig":
        if isinstance(data, AllocationConfig):
            return data
        data = _require_mapping(data, "Jaotuse seaded")
        errors: List[Dict[str, Any]] = []
        basis = _choice(data, "basis", ALLOCATION_BASES, "share", errors)
        if errors:
            raise ValidationError(errors)
        return cls(
            basis=basis,
            bylaw_deviation=data.get("bylaw_deviation", False),
            deviation_note=data.get("deviation_note", ""),
        )


@dataclass
class Funds(ModelMixin):
    """Reserve capital and repair fund movements for the period."""

    reserve_start: Decimal = Decimal("0")
    reserve_in: Decimal = Decimal("0")
    reserve_out: Decimal = Decimal("0")
    reserve_target: Decimal | None = None
    repair_start: Decimal = Decimal("0")
    repair_in: Decimal = Decimal("0")
    repair_out_other: Decimal = Decimal("0")
    repair_target: Decimal | None = None

    def __post_init__(self) -> None:
        for name in ("reserve_start", "reserve_in", "reserve_out", "repair_start", "repair_in", "repair_out_other"):
            setattr(self, name, parse_amount(getattr(self, name)))
        self.reserve_target = parse_optional_amount(self.reserve_target)
        self.repair_target = parse_optional_amount(self.repair_target)

    @classmethod
    def from_dict(cls, data: Any) -> "Funds":
        if isinstance(data, Funds):
            return data
        data = _require_mapping(data, "Fondid")
        names = [f.name for f in fields(cls)]
        return cls(**{name: data.get(name) for name in names if name in data})


@dataclass
class HeatMonth(ModelMixin):
    id: str
    month: str
    qty_mwh: Decimal = Decimal("0")
    price_per_mwh: Decimal = Decimal("0")
    prev_cost: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.month = _as_text(self.month)
        self.qty_mwh = parse_amount(self.qty_mwh)
        self.price_per_mwh = parse_amount(self.price_per_mwh)
        self.prev_cost = parse_amount(self.prev_cost)

    @classmethod
    def from_dict(cls, data: Any) -> "HeatMonth":
        if isinstance(data, HeatMonth):
            return data
        data = _require_mapping(data, "Soojuse rida")
        return cls(
            id=_as_text(data.get("id")) or new_id(),
            month=data.get("month", ""),
            qty_mwh=data.get("qty_mwh", 0),
            price_per_mwh=data.get("price_per_mwh", 0),
            prev_cost=data.get("prev_cost", 0),
        )


@dataclass
class EnergyLine(ModelMixin):
    id: str
    label: str
    unit: str = ""
    qty: Decimal = Decimal("0")
    price: Decimal = Decimal("0")
    prev_cost: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.label = _as_text(self.label)
        self.unit = _as_text(self.unit)
        self.qty = parse_amount(self.qty)
        self.price = parse_amount(self.price)
        self.prev_cost = parse_amount(self.prev_cost)

    @classmethod
    def from_dict(cls, data: Any) -> "EnergyLine":
        if isinstance(data, EnergyLine):
            return data
        data = _require_mapping(data, "Energia rida")
        return cls(
            id=_as_text(data.get("id")) or new_id(),
            label=data.get("label", ""),
            unit=data.get("unit", ""),
            qty=data.get("qty", 0),
            price=data.get("price", 0),
            prev_cost=data.get("prev_cost", 0),
        )


@dataclass
class Energy(ModelMixin):
    heat_months: List[HeatMonth] = field(default_factory=list)
    other: List[EnergyLine] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Energy":
        if isinstance(data, Energy):
            return data
        data = _require_mapping(data, "Energia prognoos")
        errors: List[Dict[str, Any]] = []
        heat_months = _rows(data, "heat_months", HeatMonth.from_dict, errors)
        other = _rows(data, "other", EnergyLine.from_dict, errors)
        if errors:
            raise ValidationError(errors)
        return cls(heat_months=heat_months, other=other)


def _twelve_blanks() -> List[Decimal | None]:
    return [None] * 12


@dataclass
class CashFlowSettings(ModelMixin):
    """Distribution policies of the monthly cash-flow projection."""

    income_policy: str = "even"
    running_policy: str = "even"
    energy_weights: List[Decimal | None] = field(default_factory=_twelve_blanks)

    def __post_init__(self) -> None:
        weights = [parse_optional_amount(value) for value in list(self.energy_weights)[:12]]
        weights.extend([None] * (12 - len(weights)))
        self.energy_weights = weights

    @classmethod
    def from_dict(cls, data: Any) -> "CashFlowSettings":
        if isinstance(data, CashFlowSettings):
            return data
        data = _require_mapping(data, "Rahavoo seaded")
        errors: List[Dict[str, Any]] = []
        income_policy = _choice(data, "income_policy", INCOME_POLICIES, "even", errors)
        running_policy = _choice(data, "running_policy", RUNNING_POLICIES, "even", errors)
        weights = data.get("energy_weights") or []
        if isinstance(weights, (str, bytes, Mapping)) or not isinstance(weights, Iterable):
            errors.append({"loc": ("energy_weights",), "msg": "Kaalud peavad olema loend."})
            weights = []
        if errors:
            raise ValidationError(errors)
        return cls(income_policy=income_policy, running_policy=running_policy, energy_weights=list(weights))


@dataclass
class Confirmation(ModelMixin):
    """General meeting decision record."""

    status: str = "draft"
    meeting_date: str = ""
    meeting_place: str = ""
    votes_for: str = ""
    votes_against: str = ""
    votes_abstain: str = ""
    protocol_no: str = ""
    effective_from: str = ""
    retroactive: bool = False
    retroactive_reason: str = ""

    def __post_init__(self) -> None:
        if self.status not in PLAN_STATUSES:
            raise ValueError(f"Staatus peab olema üks järgmistest: {', '.join(PLAN_STATUSES)}.")
        self.retroactive = _as_bool(self.retroactive)

    @property
    def has_protocol_reference(self) -> bool:
        return bool(self.protocol_no.strip() and self.meeting_date.strip())

    @classmethod
    def from_dict(cls, data: Any) -> "Confirmation":
        if isinstance(data, Confirmation):
            return data
        data = _require_mapping(data, "Kinnitus")
        errors: List[Dict[str, Any]] = []
        status = _choice(data, "status", PLAN_STATUSES, "draft", errors)
        if errors:
            raise ValidationError(errors)
        return cls(
            status=status,
            retroactive=data.get("retroactive", False),
            **_text_kwargs(
                cls,
                data,
                (
                    "meeting_date",
                    "meeting_place",
                    "votes_for",
                    "votes_against",
                    "votes_abstain",
                    "protocol_no",
                    "effective_from",
                    "retroactive_reason",
                ),
            ),
        )


@dataclass
class Plan(ModelMixin):
    """Root document: one association's annual financial plan."""

    schema_version: int = SCHEMA_VERSION
    meta: Meta = field(default_factory=Meta)
    building: Building = field(default_factory=Building)
    condition: List[ConditionItem] = field(default_factory=list)
    planned_works: List[PlannedWork] = field(default_factory=list)
    works_notes: str = ""
    budget: Budget = field(default_factory=Budget)
    units: List[Unit] = field(default_factory=list)
    allocation: AllocationConfig = field(default_factory=AllocationConfig)
    funds: Funds = field(default_factory=Funds)
    energy: Energy = field(default_factory=Energy)
    cashflow: CashFlowSettings = field(default_factory=CashFlowSettings)
    confirmation: Confirmation = field(default_factory=Confirmation)

    @classmethod
    def from_dict(cls, data: Any) -> "Plan":
        if isinstance(data, Plan):
            return data
        data = _require_mapping(data, "Majanduskava")
        errors: List[Dict[str, Any]] = []
        plan = cls(
            schema_version=SCHEMA_VERSION,
            meta=_section(data, "meta", Meta.from_dict, Meta, errors),
            building=_section(data, "building", Building.from_dict, Building, errors),
            condition=_rows(data, "condition", ConditionItem.from_dict, errors),
            planned_works=_rows(data, "planned_works", PlannedWork.from_dict, errors),
            works_notes=_as_text(data.get("works_notes", "")),
            budget=_section(data, "budget", Budget.from_dict, Budget, errors),
            units=_rows(data, "units", Unit.from_dict, errors),
            allocation=_section(data, "allocation", AllocationConfig.from_dict, AllocationConfig, errors),
            funds=_section(data, "funds", Funds.from_dict, Funds, errors),
            energy=_section(data, "energy", Energy.from_dict, Energy, errors),
            cashflow=_section(data, "cashflow", CashFlowSettings.from_dict, CashFlowSettings, errors),
            confirmation=_section(data, "confirmation", Confirmation.from_dict, Confirmation, errors),
        )
        if errors:
            raise ValidationError(errors)
        return plan


__all__ = [
    "ALLOCATION_BASES",
    "AllocationConfig",
    "Budget",
    "BudgetLine",
    "Building",
    "CONDITION_STATUSES",
    "CashFlowSettings",
    "ConditionItem",
    "Confirmation",
    "ENERGY_GROUP",
    "Energy",
    "EnergyLine",
    "FUNDING_SOURCES",
    "Funds",
    "HeatMonth",
    "INCOME_POLICIES",
    "Meta",
    "ModelMixin",
    "PLANNED_WORKS_LINE_ID",
    "PLANNED_WORKS_LINE_LABEL",
    "PLAN_STATUSES",
    "PlannedWork",
    "Plan",
    "RUNNING_POLICIES",
    "SCHEMA_VERSION",
    "UNIT_TYPES",
    "Unit",
    "ValidationError",
    "WORK_CATEGORIES",
    "new_id",
]
