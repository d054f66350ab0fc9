from dataclasses import dataclass


@dataclass(frozen=True)
class Operator:
    """
    The airline, air force, or other organization operating a flight. `color` is the operator's livery color as a CSS
    hex string and is used for the flight's marker and trail.
    """

    code: str
    name: str
    country: str
    color: str


ECO_CODE = "ECO"

# fmt:off
OPERATORS: tuple[Operator, ...] = (
    # Americas
    Operator("AAL",  "American Airlines",  "US",  "#c2c2c2"),
    Operator("UAL",  "United Airlines",    "US",  "#005DAA"),
    Operator("DAL",  "Delta Air Lines",    "US",  "#E31837"),
    Operator("SWA",  "Southwest",          "US",  "#F9B612"),
    # Europe
    Operator("BAW",  "British Airways",    "GB",  "#002E70"),
    Operator("DLH",  "Lufthansa",          "DE",  "#FFAB00"),
    Operator("AFR",  "Air France",         "FR",  "#002157"),
    Operator("KLM",  "KLM",                "NL",  "#00A1DE"),
    Operator("RYR",  "Ryanair",            "IE",  "#073590"),
    # Middle East & Africa
    Operator("UAE",  "Emirates",           "AE",  "#FF0000"),
    Operator("QTR",  "Qatar Airways",      "QA",  "#5C0632"),
    # Asia Pacific
    Operator("SIA",  "Singapore Airlines", "SG",  "#FDB913"),
    Operator("CPA",  "Cathay Pacific",     "HK",  "#006B6E"),
    Operator("ANA",  "All Nippon Airways", "JP",  "#1046A8"),
    Operator("JAL",  "Japan Airlines",     "JP",  "#CC0000"),
    Operator("QFA",  "Qantas",             "AU",  "#E0001B"),
    # Cargo
    Operator("FDX",  "FedEx Express",      "US",  "#4D148C"),
    Operator("UPS",  "UPS Airlines",       "US",  "#FFB500"),
    # Military
    Operator("RCH",  "US Air Force",       "US",  "#475569"),
    Operator("RRR",  "Royal Air Force",    "GB",  "#5B8FA6"),
    Operator("NATO", "NATO",               "INT", "#1e3a8a"),
    # Eco
    Operator(ECO_CODE, "ECO FLY Zero",     "INT", "#10b981"),
)
# fmt:on

# Rotorcraft and air taxis aren't flown by any cataloged operator.
PRIVATE = Operator("PVT", "Private Ops", "", "#94a3b8")

AIRLINE_COUNT = 16
CARGO_CODES = ("FDX", "UPS")
MILITARY_CODES = ("RCH", "RRR", "NATO")


def operator_codes() -> set[str]:
    return {o.code for o in OPERATORS} | {PRIVATE.code}


def find_operator(code: str) -> Operator | None:
    if code == PRIVATE.code:
        return PRIVATE
    return next((o for o in OPERATORS if o.code == code), None)
