# snackbar/filters/nutrient_normalizer.py

"""Group raw nutrient facts into labelled, numeric display entries.

The catalog reports each nutrient under several keys that differ only by
a measurement-basis suffix (``sugars``, ``sugars_100g``,
``sugars_serving``, ``sugars_unit``, ``sugars_value``).  This module folds
those keys back into one :class:`NutrientEntry` per nutrient and provides
the scaling helpers used when showing values for an arbitrary amount.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

_SUFFIX_RE = re.compile(r"(.+)_(100g|serving|unit|value)$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"-?\d*\.?\d+")
_VOLUME_RE = re.compile(r"\d\s*(ml|cl|dl|l)\b", re.IGNORECASE)
_MASS_RE = re.compile(r"\d\s*(mg|g|kg)\b", re.IGNORECASE)

NUTRIENT_LABELS: dict[str, str] = {
    "carbohydrates": "Carbohydrates",
    "energy": "Energy",
    "energy-kcal": "Energy (kcal)",
    "energy-kj": "Energy (kJ)",
    "fat": "Fat",
    "fiber": "Fibre",
    "proteins": "Protein",
    "salt": "Salt",
    "saturated-fat": "Saturated fat",
    "sodium": "Sodium",
    "sugars": "Sugars",
    "fruits-vegetables-nuts-estimate-from-ingredients": (
        "Fruit, vegetables and nuts (estimate)"
    ),
}

SUFFIX_LABELS: dict[str, str] = {
    "100g": "per 100 g",
    "serving": "per serving",
    "unit": "unit",
    "value": "value",
}


@dataclass(frozen=True)
class NutrientEntry:
    """One nutrient with its values on every basis the catalog supplied."""

    key: str
    label: str
    unit: str = ""
    per_100g: float | None = None
    per_serving: float | None = None
    base: float | None = None


def to_number(value: object) -> float | None:
    """Parse a raw nutrient value; ``"1,5 g"`` becomes ``1.5``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _NUMBER_RE.search(value.replace(",", ".", 1))
        if not match:
            return None
        number = float(match.group(0))
        return number if math.isfinite(number) else None
    return None


def _prettify(key: str) -> str:
    spaced = " ".join(re.sub(r"[_-]", " ", key).split())
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def nutrient_label(key: str) -> str:
    """Human label for a raw key, including its basis suffix if any."""
    match = _SUFFIX_RE.match(key)
    base_key = match.group(1) if match else key
    base_label = NUTRIENT_LABELS.get(base_key.lower()) or _prettify(base_key)
    if not match:
        return base_label

    suffix = match.group(2).lower()
    suffix_label = SUFFIX_LABELS.get(suffix, suffix)
    if base_label.endswith(")") and "(" in base_label:
        return f"{base_label[:-1]}, {suffix_label})"
    return f"{base_label} ({suffix_label})"


def normalize_nutrients(
    facts: Mapping[str, str | float | int],
) -> list[NutrientEntry]:
    """Fold raw nutrient facts into one entry per nutrient.

    Keys describing prepared food (``*_prepared_*``) are ignored.  Entries
    keep the order in which their nutrient first appears.
    """
    grouped: dict[str, dict[str, object]] = {}
    for key, value in facts.items():
        if "prepared" in key.lower():
            continue
        match = _SUFFIX_RE.match(key)
        base_key = match.group(1) if match else key
        suffix = match.group(2).lower() if match else "base"
        grouped.setdefault(base_key, {})[suffix] = value

    entries: list[NutrientEntry] = []
    for base_key, values in grouped.items():
        unit = values.get("unit")
        base_value = values.get("base")
        if base_value is None:
            base_value = values.get("value")
        entries.append(
            NutrientEntry(
                key=base_key,
                label=nutrient_label(base_key),
                unit=str(unit) if unit else "",
                per_100g=to_number(values.get("100g")),
                per_serving=to_number(values.get("serving")),
                base=to_number(base_value),
            )
        )
    return entries


def infer_amount_unit(quantity: str | None) -> str:
    """Guess whether *quantity* is a volume (``ml``) or mass (``g``)."""
    if not quantity:
        return "g"
    if _VOLUME_RE.search(quantity):
        return "ml"
    if _MASS_RE.search(quantity):
        return "g"
    return "g/ml"


def choose_scaling_mode(entries: list[NutrientEntry]) -> str:
    """Prefer per-100 g scaling, then per-serving, else raw values."""
    if any(e.per_100g is not None for e in entries):
        return "per100g"
    if any(e.per_serving is not None for e in entries):
        return "serving"
    return "base"


def scale_nutrient(
    entry: NutrientEntry,
    amount: float,
    mode: str,
) -> float | None:
    """Value of *entry* for *amount* grams/ml or servings under *mode*."""
    if mode == "per100g" and entry.per_100g is not None:
        return entry.per_100g * (amount / 100)
    if mode == "serving" and entry.per_serving is not None:
        return entry.per_serving * amount
    if entry.base is not None:
        return entry.base
    if entry.per_100g is not None:
        return entry.per_100g
    return entry.per_serving


def format_nutrient_value(value: float | None, unit: str = "") -> str:
    """Round by magnitude: two decimals below 10, one below 100."""
    if value is None or math.isnan(value):
        return "–"
    magnitude = abs(value)
    if magnitude == 0:
        decimals = 0
    elif magnitude < 10:
        decimals = 2
    elif magnitude < 100:
        decimals = 1
    else:
        decimals = 0
    rounded = round(value, decimals)
    display = (
        str(int(rounded))
        if float(rounded).is_integer()
        else f"{rounded:.{decimals}f}"
    )
    return f"{display} {unit}" if unit else display
