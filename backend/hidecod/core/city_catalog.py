"""City Catalog — built-in city list and suggestion filtering for the allow-list editor.

Invariants:
    - Catalog order is the display order; filtering never reorders
    - The "add" suggestion appears only for a non-empty query not already known
      (case-insensitive) as a catalog entry or a selected city

Design Decisions:
    - Static tuple, not a data file: the list is small and edited with the code
"""

from dataclasses import dataclass

from hidecod.core.normalize import to_title_case

ADD_PREFIX = "__ADD__"

PAK_CITIES: tuple[str, ...] = (
    "Islamabad",
    "Karachi",
    "Lahore",
    "Rawalpindi",
    "Faisalabad",
    "Multan",
    "Peshawar",
    "Quetta",
    "Hyderabad",
    "Gujranwala",
    "Sialkot",
    "Sargodha",
    "Bahawalpur",
    "Sukkur",
    "Larkana",
    "Sheikhupura",
    "Rahim Yar Khan",
    "Jhang",
    "Gujrat",
    "Mardan",
    "Kasur",
    "Sahiwal",
    "Okara",
    "Wah Cantonment",
    "Mingora (Swat)",
    "Dera Ghazi Khan",
    "Nawabshah (Shaheed Benazirabad)",
    "Mirpur Khas",
    "Chiniot",
    "Khanewal",
    "Hafizabad",
    "Dera Ismail Khan",
    "Turbat",
    "Muridke",
    "Muzaffargarh",
    "Kohat",
    "Abbottabad",
    "Burewala",
    "Jhelum",
    "Bahawalnagar",
    "Kamoke",
    "Mandi Bahauddin",
    "Sadiqabad",
    "Gojra",
    "Nowshera",
    "Charsadda",
    "Tando Allahyar",
    "Tando Muhammad Khan",
    "Matiari",
    "Sanghar",
    "Shikarpur",
    "Jacobabad",
    "Khairpur",
    "Thatta",
    "Badin",
    "Umerkot",
    "Daska",
    "Pakpattan",
    "Layyah",
    "Vehari",
    "Kot Addu",
    "Jaranwala",
    "Chakwal",
    "Attock",
    "Kotri",
    "Hala",
    "Jamshoro",
    "Sehwan",
    "Hub",
    "Mastung",
    "Ziarat",
    "Kalat",
    "Khuzdar",
    "Gwadar",
    "Kharian",
    "Mianwali",
    "Bhakkar",
    "Narowal",
    "Toba Tek Singh",
    "Haripur",
    "Swabi",
    "Mansehra",
    "Bannu",
    "Chaman",
    "Gilgit",
    "Skardu",
    "Hunza",
    "Ghizer",
    "Muzaffarabad (AJK)",
    "Mirpur (AJK)",
    "Kotli (AJK)",
)


@dataclass(frozen=True)
class CitySuggestion:
    label: str
    value: str
    is_new: bool = False


def suggest_cities(
    query: str, selected: list[str] | None = None,
    catalog: tuple[str, ...] = PAK_CITIES,
) -> list[CitySuggestion]:
    """Catalog entries containing the query, plus an 'Add' entry for unknown input."""
    needle = (query or "").strip().lower()
    suggestions = [
        CitySuggestion(label=c, value=c)
        for c in catalog if needle in c.lower()
    ]
    if not needle:
        return suggestions

    known = {c.lower() for c in catalog}
    known.update(c.lower() for c in (selected or []))
    if needle not in known:
        title = to_title_case(query)
        suggestions.append(CitySuggestion(
            label=f'Add "{title}"', value=f"{ADD_PREFIX}{title}", is_new=True,
        ))
    return suggestions
