"""Deterministic fixture data for the mock sources, keyed by canonical plate."""

MOCK_VEHICLES: dict[str, dict] = {
    "AB12CDE": {
        "registration_number": "AB12 CDE",
        "make": "VOLKSWAGEN",
        "model": "GOLF",
        "colour": "BLUE",
        "fuel_type": "PETROL",
        "engine_capacity": 1984,
        "co2_emissions": 139,
        "year_of_manufacture": 2012,
        "tax_status": "Taxed",
        "tax_due_date": "2025-03-01",
        "mot_status": "Valid",
        "mot_expiry_date": "2025-08-15",
        "date_of_last_v5c_issued": "2023-06-20",
        "wheelplan": "2 AXLE RIGID BODY",
        "month_of_first_registration": "2012-03",
        "euro_status": "Euro 5",
    },
    "BD19XYZ": {
        "registration_number": "BD19 XYZ",
        "make": "BMW",
        "model": "3 SERIES",
        "colour": "BLACK",
        "fuel_type": "DIESEL",
        "engine_capacity": 1995,
        "co2_emissions": 112,
        "year_of_manufacture": 2019,
        "tax_status": "Taxed",
        "tax_due_date": "2025-07-01",
        "mot_status": "Valid",
        "mot_expiry_date": "2025-11-22",
        "date_of_last_v5c_issued": "2024-01-15",
        "wheelplan": "2 AXLE RIGID BODY",
        "month_of_first_registration": "2019-06",
        "euro_status": "Euro 6",
    },
    "YH65ABC": {
        "registration_number": "YH65 ABC",
        "make": "FORD",
        "model": "FOCUS",
        "colour": "SILVER",
        "fuel_type": "PETROL",
        "engine_capacity": 1596,
        "co2_emissions": 129,
        "year_of_manufacture": 2015,
        "tax_status": "SORN",
        "mot_status": "Not valid",
        "mot_expiry_date": "2024-02-10",
        "date_of_last_v5c_issued": "2022-11-30",
        "wheelplan": "2 AXLE RIGID BODY",
        "month_of_first_registration": "2015-09",
        "euro_status": "Euro 6",
    },
    "WR71DEF": {
        "registration_number": "WR71 DEF",
        "make": "TESLA",
        "model": "MODEL 3",
        "colour": "WHITE",
        "fuel_type": "ELECTRIC",
        "engine_capacity": 0,
        "co2_emissions": 0,
        "year_of_manufacture": 2021,
        "tax_status": "Taxed",
        "tax_due_date": "2025-12-01",
        "mot_status": "Valid",
        "mot_expiry_date": "2025-09-05",
        "date_of_last_v5c_issued": "2024-06-10",
        "wheelplan": "2 AXLE RIGID BODY",
        "month_of_first_registration": "2021-09",
    },
    "MK08GHI": {
        "registration_number": "MK08 GHI",
        "make": "VAUXHALL",
        "model": "ASTRA",
        "colour": "RED",
        "fuel_type": "PETROL",
        "engine_capacity": 1796,
        "co2_emissions": 169,
        "year_of_manufacture": 2008,
        "tax_status": "Untaxed",
        "mot_status": "Not valid",
        "mot_expiry_date": "2023-05-18",
        "date_of_last_v5c_issued": "2021-03-22",
        "wheelplan": "2 AXLE RIGID BODY",
        "month_of_first_registration": "2008-03",
        "euro_status": "Euro 4",
    },
}


def _test(completed, result, odometer, number, defects=(), expiry=None):
    return {
        "completed_date": completed,
        "test_result": result,
        "expiry_date": expiry,
        "odometer_value": odometer,
        "odometer_unit": "mi",
        "mot_test_number": number,
        "defects": [
            {"text": text, "type": kind, "dangerous": kind == "DANGEROUS"}
            for text, kind in defects
        ],
    }


MOCK_MOT_HISTORY: dict[str, dict] = {
    "AB12CDE": {
        "registration": "AB12CDE",
        "make": "VOLKSWAGEN",
        "model": "GOLF",
        "first_used_date": "2012-03-15",
        "fuel_type": "Petrol",
        "primary_colour": "Blue",
        "mot_tests": [
            _test(
                "2024-08-15", "PASSED", 87234, "1234567890",
                [
                    ("Front brake disc worn, close to legal limit", "ADVISORY"),
                    ("Nearside front tyre worn close to legal limit", "ADVISORY"),
                ],
                expiry="2025-08-15",
            ),
            _test(
                "2023-08-10", "PASSED", 78456, "1234567889",
                [("Nearside front anti-roll bar linkage ball joint has slight play", "ADVISORY")],
                expiry="2024-08-10",
            ),
            _test(
                "2022-08-05", "FAILED", 69123, "1234567888",
                [
                    ("Offside headlamp aim too high", "FAIL"),
                    ("Nearside front brake disc excessively worn", "MAJOR"),
                    (
                        "Exhaust emissions Lambda reading after 2nd fast idle "
                        "outside specified limits",
                        "FAIL",
                    ),
                ],
            ),
            _test("2022-08-08", "PASSED", 69125, "1234567887", expiry="2023-08-08"),
            _test(
                "2021-08-02", "PASSED", 58901, "1234567886",
                [("Offside front tyre slightly damaged/cracking or perishing", "ADVISORY")],
                expiry="2022-08-02",
            ),
            _test("2020-07-28", "PASSED", 47823, "1234567885", expiry="2021-07-28"),
        ],
    },
    "BD19XYZ": {
        "registration": "BD19XYZ",
        "make": "BMW",
        "model": "3 SERIES",
        "first_used_date": "2019-06-20",
        "fuel_type": "Diesel",
        "primary_colour": "Black",
        "mot_tests": [
            _test("2024-11-22", "PASSED", 45234, "2345678901", expiry="2025-11-22"),
            _test(
                "2023-11-18", "PASSED", 32456, "2345678900",
                [
                    (
                        "Windscreen has damage to an area less than a 10mm circle "
                        "outside zone A",
                        "ADVISORY",
                    )
                ],
                expiry="2024-11-18",
            ),
            _test("2022-11-15", "PASSED", 21098, "2345678899", expiry="2023-11-15"),
        ],
    },
    "YH65ABC": {
        "registration": "YH65ABC",
        "make": "FORD",
        "model": "FOCUS",
        "first_used_date": "2015-09-01",
        "fuel_type": "Petrol",
        "primary_colour": "Silver",
        "mot_tests": [
            _test(
                "2023-02-10", "FAILED", 112456, "3456789012",
                [
                    (
                        "Offside front outer constant velocity joint gaiter damaged to "
                        "the extent that it no longer prevents the ingress of dirt",
                        "MAJOR",
                    ),
                    ("Nearside rear tyre tread depth below requirements", "MAJOR"),
                    ("Offside rear tyre tread depth below requirements", "MAJOR"),
                    ("Exhaust has a major leak of exhaust gases", "MAJOR"),
                ],
            ),
            _test(
                "2022-02-05", "PASSED", 98234, "3456789011",
                [
                    ("Front brake disc worn, close to legal limit", "ADVISORY"),
                    ("Rear brake disc worn, pitting/scoring", "ADVISORY"),
                ],
                expiry="2023-02-05",
            ),
        ],
    },
    "WR71DEF": {
        "registration": "WR71DEF",
        "make": "TESLA",
        "model": "MODEL 3",
        "first_used_date": "2021-09-15",
        "fuel_type": "Electric",
        "primary_colour": "White",
        "mot_tests": [
            _test("2024-09-05", "PASSED", 28456, "4567890123", expiry="2025-09-05"),
        ],
    },
    "MK08GHI": {
        "registration": "MK08GHI",
        "make": "VAUXHALL",
        "model": "ASTRA",
        "first_used_date": "2008-03-20",
        "fuel_type": "Petrol",
        "primary_colour": "Red",
        "mot_tests": [
            _test(
                "2022-05-18", "FAILED", 156789, "5678901234",
                [
                    ("Nearside rear coil spring fractured", "DANGEROUS"),
                    ("Offside front wheel bearing has excessive play", "MAJOR"),
                    ("Exhaust emissions exceed the limits", "MAJOR"),
                    ("Nearside front brake disc excessively worn", "MAJOR"),
                    ("Offside front brake disc excessively worn", "MAJOR"),
                    ("Central locking does not secure the vehicle", "MINOR"),
                ],
            ),
            _test(
                "2021-05-12", "PASSED", 145234, "5678901233",
                [
                    ("Nearside front tyre worn close to legal limit", "ADVISORY"),
                    ("Offside front tyre worn close to legal limit", "ADVISORY"),
                    ("Brake fluid is below minimum", "ADVISORY"),
                    ("Exhaust has slight blowing at a joint", "ADVISORY"),
                ],
                expiry="2022-05-12",
            ),
        ],
    },
}
