"""
Statutory Rate Tables
Immutable, versioned contribution tables for EPF, SOCSO, EIS and PCB.

Each table is read from its own JSON document (epf.json, socso.json, eis.json,
pcb.json). A missing document leaves that table as None; a section that cannot
be parsed is dropped on its own and the calculators fall back to their
hardcoded defaults for that section only.

Bracket ladders are validated on construction: every `max` must be strictly
greater than the one before it, and only the last bracket may be unbounded.
"""

import json
import logging
from bisect import bisect_left
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from gajicore.core.money import ZERO

logger = logging.getLogger(__name__)

INFINITY = Decimal("Infinity")

TABLE_FILES: dict[str, str] = {
    "epf": "epf.json",
    "socso": "socso.json",
    "eis": "eis.json",
    "pcb": "pcb.json",
}

class RateTableError(Exception):
    """Raised when a rate table section violates its structural invariants."""


_SECTION_ERRORS = (RateTableError, KeyError, TypeError, ValueError, InvalidOperation, AttributeError)


def _decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Expected a number, got {value!r}")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _optional_decimal(data: Mapping, key: str, default: Decimal) -> Decimal:
    if key not in data or data[key] is None:
        return default
    return _decimal(data[key])


def _section(table: str, name: str, parse: Callable[[], Any]) -> Any:
    try:
        return parse()
    except _SECTION_ERRORS as e:
        logger.warning("Ignoring malformed %s section '%s': %s", table, name, e)
        return None


# ── Brackets ──

@dataclass(frozen=True)
class Amounts:
    employee: Decimal
    employer: Decimal


@dataclass(frozen=True)
class Bracket:
    max: Decimal
    employee: Decimal = ZERO
    employer: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: Mapping) -> "Bracket":
        return cls(
            max=_decimal(data["max"]),
            employee=_optional_decimal(data, "employee", ZERO),
            employer=_optional_decimal(data, "employer", ZERO),
        )


@dataclass(frozen=True)
class EISBracket:
    max: Decimal
    contribution: Decimal

    @classmethod
    def from_dict(cls, data: Mapping) -> "EISBracket":
        return cls(max=_decimal(data["max"]), contribution=_decimal(data["contribution"]))


@dataclass(frozen=True)
class TaxBracket:
    min: Decimal
    max: Decimal | None  # None = no upper limit
    rate: Decimal
    cumulative_tax: Decimal

    @classmethod
    def from_dict(cls, data: Mapping) -> "TaxBracket":
        upper = data.get("max")
        return cls(
            min=_optional_decimal(data, "min", ZERO),
            max=None if upper is None else _decimal(upper),
            rate=_decimal(data["rate"]),
            cumulative_tax=_optional_decimal(data, "cumulative_tax", ZERO),
        )


class BracketLadder:
    """
    Ordered brackets looked up by their upper boundary.
    find() returns the first bracket whose max is >= the value.
    """

    def __init__(self, brackets):
        self.brackets = tuple(brackets)
        self._bounds = [INFINITY if b.max is None else b.max for b in self.brackets]

        for position, (lower, upper) in enumerate(zip(self._bounds, self._bounds[1:]), start=1):
            if upper <= lower:
                raise RateTableError(
                    f"Bracket {position} max {upper} is not above previous max {lower}"
                )

    @classmethod
    def parse(cls, rows, factory) -> "BracketLadder":
        if not isinstance(rows, list):
            raise TypeError("Brackets must be a list")
        return cls(factory(row) for row in rows)

    def __len__(self) -> int:
        return len(self.brackets)

    def __iter__(self):
        return iter(self.brackets)

    def __getitem__(self, index: int):
        return self.brackets[index]

    def find(self, value: Decimal) -> int | None:
        index = bisect_left(self._bounds, value)
        if index >= len(self._bounds):
            return None
        return index

    def previous_max(self, index: int) -> Decimal:
        return ZERO if index == 0 else self._bounds[index - 1]


# ── EPF ──

@dataclass(frozen=True)
class RatePair:
    employee_rate: Decimal
    employer_rate: Decimal


@dataclass(frozen=True)
class EPFPart:
    brackets: BracketLadder
    above_ceiling: RatePair | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "EPFPart":
        above = data.get("above_20000")
        above_ceiling = None
        if above:
            above_ceiling = RatePair(
                employee_rate=_decimal(above["employee_rate"]),
                employer_rate=_decimal(above["employer_rate"]),
            )
        return cls(
            brackets=BracketLadder.parse(data["brackets"], Bracket.from_dict),
            above_ceiling=above_ceiling,
        )


FOREIGN_DEFAULT_RATE = Decimal("2")


@dataclass(frozen=True)
class ForeignWorkerRates:
    below_60: RatePair | None = None
    age_60_above: RatePair | None = None

    @staticmethod
    def _pair(data: Mapping | None) -> RatePair | None:
        if not data:
            return None
        return RatePair(
            employee_rate=_optional_decimal(data, "employee_rate", FOREIGN_DEFAULT_RATE),
            employer_rate=_optional_decimal(data, "employer_rate", FOREIGN_DEFAULT_RATE),
        )

    @classmethod
    def from_dict(cls, data: Mapping) -> "ForeignWorkerRates":
        return cls(
            below_60=cls._pair(data.get("below_60")),
            age_60_above=cls._pair(data.get("age_60_above")),
        )

    def rates_for(self, age: int) -> RatePair | None:
        if age >= 60 and self.age_60_above is not None:
            return self.age_60_above
        return self.below_60


@dataclass(frozen=True)
class EPFTable:
    part_a: EPFPart | None = None  # Malaysians below 60
    part_e: EPFPart | None = None  # Malaysians 60 and above
    foreign_worker: ForeignWorkerRates | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "EPFTable":
        def part(name):
            if name not in data:
                return None
            return _section("epf", name, lambda: EPFPart.from_dict(data[name]))

        foreign = None
        if "foreign_worker" in data:
            foreign = _section(
                "epf", "foreign_worker", lambda: ForeignWorkerRates.from_dict(data["foreign_worker"])
            )

        return cls(part_a=part("part_a"), part_e=part("part_e"), foreign_worker=foreign)

    def missing_sections(self) -> list[str]:
        return [name for name in ("part_a", "part_e", "foreign_worker") if getattr(self, name) is None]


# ── SOCSO ──

DEFAULT_SOCSO_MAX_WAGE = Decimal("6000")


@dataclass(frozen=True)
class SOCSOPart:
    max_wage: Decimal = DEFAULT_SOCSO_MAX_WAGE
    brackets: BracketLadder = field(default_factory=lambda: BracketLadder(()))
    above_max: Amounts | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "SOCSOPart":
        above = data.get("above_max")
        return cls(
            max_wage=_optional_decimal(data, "max_wage", DEFAULT_SOCSO_MAX_WAGE),
            brackets=BracketLadder.parse(data.get("brackets", []), Bracket.from_dict),
            above_max=Amounts(
                employee=_optional_decimal(above, "employee", ZERO),
                employer=_decimal(above["employer"]),
            ) if above else None,
        )


@dataclass(frozen=True)
class SOCSOTable:
    category_1: SOCSOPart | None = None
    category_2: SOCSOPart | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "SOCSOTable":
        def part(name):
            if name not in data:
                return None
            return _section("socso", name, lambda: SOCSOPart.from_dict(data[name]))

        return cls(category_1=part("category_1"), category_2=part("category_2"))

    def missing_sections(self) -> list[str]:
        return [name for name in ("category_1", "category_2") if getattr(self, name) is None]


# ── EIS ──

DEFAULT_EIS_MAX_WAGE = Decimal("6000")
DEFAULT_EIS_MAX_AGE = 60
DEFAULT_EIS_CONTRIBUTION = Decimal("11.90")


@dataclass(frozen=True)
class EISTable:
    max_wage: Decimal = DEFAULT_EIS_MAX_WAGE
    max_age: int = DEFAULT_EIS_MAX_AGE
    foreign_worker_exempt: bool = True
    brackets: BracketLadder | None = None
    above_max: Decimal = DEFAULT_EIS_CONTRIBUTION

    @classmethod
    def from_dict(cls, data: Mapping) -> "EISTable":
        brackets = None
        if "brackets" in data:
            brackets = _section(
                "eis", "brackets", lambda: BracketLadder.parse(data["brackets"], EISBracket.from_dict)
            )

        max_wage = _section("eis", "max_wage", lambda: _optional_decimal(data, "max_wage", DEFAULT_EIS_MAX_WAGE))
        max_age = _section("eis", "max_age", lambda: int(data.get("max_age", DEFAULT_EIS_MAX_AGE)))
        above_max = _section(
            "eis",
            "above_max",
            lambda: _optional_decimal(data.get("above_max") or {}, "contribution", DEFAULT_EIS_CONTRIBUTION),
        )

        exempt = data.get("foreign_worker_exempt", True)
        if not isinstance(exempt, bool):
            logger.warning("Ignoring malformed eis section 'foreign_worker_exempt': %r is not a boolean", exempt)
            exempt = True

        return cls(
            max_wage=DEFAULT_EIS_MAX_WAGE if max_wage is None else max_wage,
            max_age=DEFAULT_EIS_MAX_AGE if max_age is None else max_age,
            foreign_worker_exempt=exempt,
            brackets=brackets,
            above_max=DEFAULT_EIS_CONTRIBUTION if above_max is None else above_max,
        )

    def missing_sections(self) -> list[str]:
        return ["brackets"] if self.brackets is None else []


# ── PCB ──

@dataclass(frozen=True)
class Reliefs:
    individual: Decimal = Decimal("9000")
    spouse_not_working: Decimal = Decimal("4000")
    child_under_18: Decimal = Decimal("2000")

    @classmethod
    def from_dict(cls, data: Mapping) -> "Reliefs":
        defaults = cls()
        return cls(
            individual=_optional_decimal(data, "individual", defaults.individual),
            spouse_not_working=_optional_decimal(data, "spouse_not_working", defaults.spouse_not_working),
            child_under_18=_optional_decimal(data, "child_under_18", defaults.child_under_18),
        )


DEFAULT_NON_RESIDENT_RATE = Decimal("30")
DEFAULT_EPF_MAX_RELIEF = Decimal("4000")


@dataclass(frozen=True)
class PCBTable:
    non_resident_rate: Decimal = DEFAULT_NON_RESIDENT_RATE
    epf_max_relief: Decimal = DEFAULT_EPF_MAX_RELIEF
    minimum_pcb: Decimal = ZERO
    reliefs: Reliefs = field(default_factory=Reliefs)
    tax_brackets: BracketLadder | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "PCBTable":
        def scalar(key, default):
            value = _section("pcb", key, lambda: _optional_decimal(data, key, default))
            return default if value is None else value

        reliefs = Reliefs()
        if data.get("reliefs"):
            reliefs = _section("pcb", "reliefs", lambda: Reliefs.from_dict(data["reliefs"])) or Reliefs()

        tax_brackets = None
        if data.get("tax_brackets"):
            tax_brackets = _section(
                "pcb", "tax_brackets", lambda: BracketLadder.parse(data["tax_brackets"], TaxBracket.from_dict)
            )

        return cls(
            non_resident_rate=scalar("non_resident_rate", DEFAULT_NON_RESIDENT_RATE),
            epf_max_relief=scalar("epf_max_relief", DEFAULT_EPF_MAX_RELIEF),
            minimum_pcb=scalar("minimum_pcb", ZERO),
            reliefs=reliefs,
            tax_brackets=tax_brackets,
        )

    def missing_sections(self) -> list[str]:
        return ["tax_brackets"] if self.tax_brackets is None else []


# ── Bundle & provider ──

@dataclass(frozen=True)
class RateTables:
    epf: EPFTable | None = None
    socso: SOCSOTable | None = None
    eis: EISTable | None = None
    pcb: PCBTable | None = None

    @classmethod
    def empty(cls) -> "RateTables":
        return cls()

    @classmethod
    def from_documents(cls, documents: Mapping[str, Mapping | None]) -> "RateTables":
        """Build tables from already-decoded documents keyed by table name."""

        def build(name, factory):
            document = documents.get(name)
            if not document or not isinstance(document, Mapping):
                return None
            return factory(document)

        return cls(
            epf=build("epf", EPFTable.from_dict),
            socso=build("socso", SOCSOTable.from_dict),
            eis=build("eis", EISTable.from_dict),
            pcb=build("pcb", PCBTable.from_dict),
        )

    def status(self) -> dict[str, list[str] | None]:
        """Missing sections per table; None means the whole table is missing."""
        return {
            name: None if table is None else table.missing_sections()
            for name, table in (("epf", self.epf), ("socso", self.socso), ("eis", self.eis), ("pcb", self.pcb))
        }


class RateTableProvider:
    """
    Loads the four statutory rate tables from a directory of JSON documents.
    A missing or unreadable document yields a None table, never an error.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def read_document(self, name: str) -> dict | None:
        path = self.directory / TABLE_FILES[name]
        if not path.exists():
            logger.info("Rate table %s not found at %s, using defaults", name, path)
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f, parse_float=Decimal)
        except (OSError, ValueError) as e:
            logger.warning("Could not read rate table %s from %s: %s", name, path, e)
            return None

        if not isinstance(document, dict):
            logger.warning("Rate table %s at %s is not a JSON object, using defaults", name, path)
            return None
        return document

    def load(self) -> RateTables:
        documents = {name: self.read_document(name) for name in TABLE_FILES}
        tables = RateTables.from_documents(documents)
        logger.info("Loaded rate tables from %s: %s", self.directory, tables.status())
        return tables
