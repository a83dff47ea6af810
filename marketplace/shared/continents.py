"""
Country to continent lookup

Maps ISO 3166-1 alpha-2 country codes (as stored on Property.country) to the
continent names used by the "browse by destination" pages.
"""

from typing import Optional

AFRICA = "Africa"
ANTARCTICA = "Antarctica"
ASIA = "Asia"
EUROPE = "Europe"
NORTH_AMERICA = "North America"
OCEANIA = "Oceania"
SOUTH_AMERICA = "South America"
UNKNOWN = "Unknown"

CONTINENTS = [AFRICA, ANTARCTICA, ASIA, EUROPE, NORTH_AMERICA, OCEANIA, SOUTH_AMERICA]

COUNTRY_TO_CONTINENT = {
    # Africa
    'DZ': AFRICA, 'AO': AFRICA, 'BJ': AFRICA, 'BW': AFRICA, 'BF': AFRICA, 'BI': AFRICA,
    'CV': AFRICA, 'CM': AFRICA, 'CF': AFRICA, 'TD': AFRICA, 'KM': AFRICA, 'CG': AFRICA,
    'CD': AFRICA, 'CI': AFRICA, 'DJ': AFRICA, 'EG': AFRICA, 'GQ': AFRICA, 'ER': AFRICA,
    'SZ': AFRICA, 'ET': AFRICA, 'GA': AFRICA, 'GM': AFRICA, 'GH': AFRICA, 'GN': AFRICA,
    'GW': AFRICA, 'KE': AFRICA, 'LS': AFRICA, 'LR': AFRICA, 'LY': AFRICA, 'MG': AFRICA,
    'MW': AFRICA, 'ML': AFRICA, 'MR': AFRICA, 'MU': AFRICA, 'YT': AFRICA, 'MA': AFRICA,
    'MZ': AFRICA, 'NA': AFRICA, 'NE': AFRICA, 'NG': AFRICA, 'RE': AFRICA, 'RW': AFRICA,
    'SH': AFRICA, 'ST': AFRICA, 'SN': AFRICA, 'SC': AFRICA, 'SL': AFRICA, 'SO': AFRICA,
    'ZA': AFRICA, 'SS': AFRICA, 'SD': AFRICA, 'TZ': AFRICA, 'TG': AFRICA, 'TN': AFRICA,
    'UG': AFRICA, 'EH': AFRICA, 'ZM': AFRICA, 'ZW': AFRICA,
    # Antarctica
    'AQ': ANTARCTICA, 'BV': ANTARCTICA, 'GS': ANTARCTICA, 'HM': ANTARCTICA, 'TF': ANTARCTICA,
    # Asia
    'AF': ASIA, 'AM': ASIA, 'AZ': ASIA, 'BH': ASIA, 'BD': ASIA, 'BT': ASIA, 'BN': ASIA,
    'KH': ASIA, 'CN': ASIA, 'CY': ASIA, 'GE': ASIA, 'HK': ASIA, 'IN': ASIA, 'ID': ASIA,
    'IR': ASIA, 'IQ': ASIA, 'IL': ASIA, 'JP': ASIA, 'JO': ASIA, 'KZ': ASIA, 'KW': ASIA,
    'KG': ASIA, 'LA': ASIA, 'LB': ASIA, 'MO': ASIA, 'MY': ASIA, 'MV': ASIA, 'MN': ASIA,
    'MM': ASIA, 'NP': ASIA, 'KP': ASIA, 'OM': ASIA, 'PK': ASIA, 'PS': ASIA, 'PH': ASIA,
    'QA': ASIA, 'SA': ASIA, 'SG': ASIA, 'KR': ASIA, 'LK': ASIA, 'SY': ASIA, 'TW': ASIA,
    'TJ': ASIA, 'TH': ASIA, 'TL': ASIA, 'TR': ASIA, 'TM': ASIA, 'AE': ASIA, 'UZ': ASIA,
    'VN': ASIA, 'YE': ASIA, 'IO': ASIA, 'CC': ASIA, 'CX': ASIA,
    # Europe
    'AX': EUROPE, 'AL': EUROPE, 'AD': EUROPE, 'AT': EUROPE, 'BY': EUROPE, 'BE': EUROPE,
    'BA': EUROPE, 'BG': EUROPE, 'HR': EUROPE, 'CZ': EUROPE, 'DK': EUROPE, 'EE': EUROPE,
    'FO': EUROPE, 'FI': EUROPE, 'FR': EUROPE, 'DE': EUROPE, 'GI': EUROPE, 'GR': EUROPE,
    'GG': EUROPE, 'HU': EUROPE, 'IS': EUROPE, 'IE': EUROPE, 'IM': EUROPE, 'IT': EUROPE,
    'JE': EUROPE, 'XK': EUROPE, 'LV': EUROPE, 'LI': EUROPE, 'LT': EUROPE, 'LU': EUROPE,
    'MT': EUROPE, 'MD': EUROPE, 'MC': EUROPE, 'ME': EUROPE, 'NL': EUROPE, 'MK': EUROPE,
    'NO': EUROPE, 'PL': EUROPE, 'PT': EUROPE, 'RO': EUROPE, 'RU': EUROPE, 'SM': EUROPE,
    'RS': EUROPE, 'SK': EUROPE, 'SI': EUROPE, 'ES': EUROPE, 'SJ': EUROPE, 'SE': EUROPE,
    'CH': EUROPE, 'UA': EUROPE, 'GB': EUROPE, 'UK': EUROPE, 'VA': EUROPE,
    # North America (incl. Central America and the Caribbean)
    'AI': NORTH_AMERICA, 'AG': NORTH_AMERICA, 'AW': NORTH_AMERICA, 'BS': NORTH_AMERICA,
    'BB': NORTH_AMERICA, 'BZ': NORTH_AMERICA, 'BM': NORTH_AMERICA, 'BQ': NORTH_AMERICA,
    'VG': NORTH_AMERICA, 'CA': NORTH_AMERICA, 'KY': NORTH_AMERICA, 'CR': NORTH_AMERICA,
    'CU': NORTH_AMERICA, 'CW': NORTH_AMERICA, 'DM': NORTH_AMERICA, 'DO': NORTH_AMERICA,
    'SV': NORTH_AMERICA, 'GL': NORTH_AMERICA, 'GD': NORTH_AMERICA, 'GP': NORTH_AMERICA,
    'GT': NORTH_AMERICA, 'HT': NORTH_AMERICA, 'HN': NORTH_AMERICA, 'JM': NORTH_AMERICA,
    'MQ': NORTH_AMERICA, 'MX': NORTH_AMERICA, 'MS': NORTH_AMERICA, 'NI': NORTH_AMERICA,
    'PA': NORTH_AMERICA, 'PR': NORTH_AMERICA, 'BL': NORTH_AMERICA, 'KN': NORTH_AMERICA,
    'LC': NORTH_AMERICA, 'MF': NORTH_AMERICA, 'PM': NORTH_AMERICA, 'VC': NORTH_AMERICA,
    'SX': NORTH_AMERICA, 'TT': NORTH_AMERICA, 'TC': NORTH_AMERICA, 'US': NORTH_AMERICA,
    'VI': NORTH_AMERICA, 'UM': NORTH_AMERICA,
    # Oceania
    'AS': OCEANIA, 'AU': OCEANIA, 'CK': OCEANIA, 'FJ': OCEANIA, 'PF': OCEANIA, 'GU': OCEANIA,
    'KI': OCEANIA, 'MH': OCEANIA, 'FM': OCEANIA, 'NR': OCEANIA, 'NC': OCEANIA, 'NZ': OCEANIA,
    'NU': OCEANIA, 'NF': OCEANIA, 'MP': OCEANIA, 'PW': OCEANIA, 'PG': OCEANIA, 'PN': OCEANIA,
    'WS': OCEANIA, 'SB': OCEANIA, 'TK': OCEANIA, 'TO': OCEANIA, 'TV': OCEANIA, 'VU': OCEANIA,
    'WF': OCEANIA,
    # South America
    'AR': SOUTH_AMERICA, 'BO': SOUTH_AMERICA, 'BR': SOUTH_AMERICA, 'CL': SOUTH_AMERICA,
    'CO': SOUTH_AMERICA, 'EC': SOUTH_AMERICA, 'FK': SOUTH_AMERICA, 'GF': SOUTH_AMERICA,
    'GY': SOUTH_AMERICA, 'PY': SOUTH_AMERICA, 'PE': SOUTH_AMERICA, 'SR': SOUTH_AMERICA,
    'UY': SOUTH_AMERICA, 'VE': SOUTH_AMERICA,
}


def short_name_to_continent(country_code: Optional[str]) -> str:
    """Continent name for a two-letter country code, or "Unknown"."""
    if not country_code:
        return UNKNOWN
    return COUNTRY_TO_CONTINENT.get(country_code.strip().upper(), UNKNOWN)


def list_continents() -> list[str]:
    return list(CONTINENTS)
