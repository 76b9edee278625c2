"""
Shared fixtures: synthetic statutory rate tables.
Bracket amounts are simplified bands, not the published schedules.
"""

import json

import pytest

from gajicore.core.rate_tables import RateTables


EPF_DOCUMENT = {
    "part_a": {
        "brackets": [
            {"max": 10, "employee": 0, "employer": 0},
            {"max": 3000, "employee": 330, "employer": 390},
            {"max": 5000, "employee": 550, "employer": 650},
            {"max": 5100, "employee": 561, "employer": 612},
            {"max": 20000, "employee": 2200, "employer": 2400},
        ],
        "above_20000": {"employee_rate": 11, "employer_rate": 12},
    },
    "part_e": {
        "brackets": [
            {"max": 5000, "employee": 0, "employer": 200},
            {"max": 20000, "employee": 0, "employer": 800},
        ],
        "above_20000": {"employee_rate": 0, "employer_rate": 4},
    },
    "foreign_worker": {
        "below_60": {"employee_rate": 2, "employer_rate": 2},
        "age_60_above": {"employee_rate": 0, "employer_rate": 2},
    },
}

SOCSO_DOCUMENT = {
    "category_1": {
        "max_wage": 6000,
        "brackets": [
            {"max": 30, "employee": 0.10, "employer": 0.40},
            {"max": 3000, "employee": 14.75, "employer": 51.65},
            {"max": 6000, "employee": 29.75, "employer": 104.15},
        ],
        "above_max": {"employee": 29.75, "employer": 104.15},
    },
    "category_2": {
        "max_wage": 6000,
        # Employee amounts here must never be charged for Category 2
        "brackets": [
            {"max": 3000, "employee": 5.00, "employer": 36.90},
            {"max": 6000, "employee": 5.00, "employer": 74.40},
        ],
        "above_max": {"employee": 5.00, "employer": 74.40},
    },
}

EIS_DOCUMENT = {
    "max_wage": 6000,
    "max_age": 60,
    "foreign_worker_exempt": True,
    "brackets": [
        {"max": 30, "contribution": 0.05},
        {"max": 3000, "contribution": 5.90},
        {"max": 6000, "contribution": 11.90},
    ],
    "above_max": {"contribution": 11.90},
}

PCB_DOCUMENT = {
    "non_resident_rate": 30,
    "epf_max_relief": 4000,
    "minimum_pcb": 0,
    "reliefs": {"individual": 9000, "spouse_not_working": 4000, "child_under_18": 2000},
    "tax_brackets": [
        {"min": 0, "max": 5000, "rate": 0, "cumulative_tax": 0},
        {"min": 5001, "max": 20000, "rate": 1, "cumulative_tax": 0},
        {"min": 20001, "max": 35000, "rate": 3, "cumulative_tax": 150},
        {"min": 35001, "max": 50000, "rate": 6, "cumulative_tax": 600},
        {"min": 50001, "max": 70000, "rate": 11, "cumulative_tax": 1500},
        {"min": 70001, "max": 100000, "rate": 19, "cumulative_tax": 3700},
        {"min": 100001, "max": 400000, "rate": 25, "cumulative_tax": 9400},
        {"min": 400001, "max": 600000, "rate": 26, "cumulative_tax": 84400},
        {"min": 600001, "max": 2000000, "rate": 28, "cumulative_tax": 136400},
        {"min": 2000001, "max": None, "rate": 30, "cumulative_tax": 528400},
    ],
}

RATE_DOCUMENTS = {
    "epf": EPF_DOCUMENT,
    "socso": SOCSO_DOCUMENT,
    "eis": EIS_DOCUMENT,
    "pcb": PCB_DOCUMENT,
}


@pytest.fixture
def rate_tables():
    return RateTables.from_documents(RATE_DOCUMENTS)


@pytest.fixture
def rate_documents():
    return RATE_DOCUMENTS


@pytest.fixture
def table_dir(tmp_path, rate_documents):
    for name, document in rate_documents.items():
        (tmp_path / f"{name}.json").write_text(json.dumps(document))
    return tmp_path
