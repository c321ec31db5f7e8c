"""Common constants."""

from enum import Enum


class Method(str, Enum):
    """NDT inspection methods hours can be logged under."""

    ET = "ET"
    RFT = "RFT"
    MT = "MT"
    PT = "PT"
    RT = "RT"
    UT_THK = "UT_THK"
    UTSW = "UTSW"
    PMI = "PMI"
    LSI = "LSI"


# Column order used by totals and exports
METHODS = [method.value for method in Method]

# Labels shown to people (emails, exports)
METHOD_DISPLAY_NAMES = {
    "ET": "ET",
    "RFT": "RFT",
    "MT": "MT",
    "PT": "PT",
    "RT": "RT",
    "UT_THK": "UT Thk.",
    "UTSW": "UTSW",
    "PMI": "PMI",
    "LSI": "LSI",
}


class CertificationLevel(str, Enum):
    """Supervisor certification levels."""

    LEVEL_I = "Level I"
    LEVEL_II = "Level II"
    LEVEL_III = "Level III"


def method_display_name(method: str) -> str:
    """Return the printable label for a method code."""
    return METHOD_DISPLAY_NAMES.get(method, method)
