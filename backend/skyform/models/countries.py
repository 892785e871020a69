"""
Static country options for the departure/destination dropdowns.

The code is passed verbatim as the `query` of the airport lookup; the list is
not exhaustive and can be extended freely.
"""

COUNTRY_OPTIONS: list[tuple[str, str]] = [
    ("DZA", "Algeria"),
    ("AUT", "Austria"),
    ("BEL", "Belgium"),
    ("CAN", "Canada"),
    ("DNK", "Denmark"),
    ("EGY", "Egypt"),
    ("FRA", "France"),
    ("DEU", "Germany"),
    ("GRC", "Greece"),
    ("IRL", "Ireland"),
    ("ITA", "Italy"),
    ("JPN", "Japan"),
    ("MAR", "Morocco"),
    ("NLD", "Netherlands"),
    ("PRT", "Portugal"),
    ("QAT", "Qatar"),
    ("ESP", "Spain"),
    ("CHE", "Switzerland"),
    ("TUN", "Tunisia"),
    ("TUR", "Turkey"),
    ("ARE", "United Arab Emirates"),
    ("GBR", "United Kingdom"),
    ("USA", "United States"),
]


def country_label(code: str) -> str:
    for value, label in COUNTRY_OPTIONS:
        if value == code:
            return label
    return code
