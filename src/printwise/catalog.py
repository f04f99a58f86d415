"""Built-in filament catalog.

A closed, ordered table of the materials Printwise can recommend.  The
order of entries is significant: the recommender walks the catalog in
this order and the earlier entry wins a tie.

Usage::

    from printwise.catalog import all_materials, get_material

    for material in all_materials():
        print(material.name, material.temperature_range.label)

    petg = get_material("petg")
    print(petg.best_for)   # ("Mechanical parts", "Outdoor use", "Containers")
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemperatureRange:
    """Recommended nozzle temperature window in °C."""

    min_c: int
    max_c: int

    @property
    def label(self) -> str:
        return f"{self.min_c}-{self.max_c}°C"


@dataclass(frozen=True)
class MaterialProfile:
    """Properties of a filament, scored on a 1-10 scale.

    Attributes:
        id: Stable key used by the bonus and settings rules (``"PETG"``).
        name: Display name.
        description: One-line summary shown with a recommendation.
        strength: Relative mechanical strength (1-10).
        flexibility: Relative flexibility (1-10).
        ease: How forgiving the material is to print (1-10).
        temperature_range: Nozzle temperature window.
        best_for: Typical use cases, most typical first.
    """

    id: str
    name: str
    description: str
    strength: int
    flexibility: int
    ease: int
    temperature_range: TemperatureRange
    best_for: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["temperature_range"] = {
            "min_c": self.temperature_range.min_c,
            "max_c": self.temperature_range.max_c,
            "label": self.temperature_range.label,
        }
        data["best_for"] = list(self.best_for)
        return data


# ---------------------------------------------------------------------------
# Built-in material table
# ---------------------------------------------------------------------------

_MATERIALS: tuple[MaterialProfile, ...] = (
    MaterialProfile(
        id="PLA",
        name="PLA",
        description="Easy to print, biodegradable, great for beginners",
        strength=6,
        flexibility=3,
        ease=10,
        temperature_range=TemperatureRange(190, 220),
        best_for=("Prototypes", "Decorative items", "Low-stress parts"),
    ),
    MaterialProfile(
        id="ABS",
        name="ABS",
        description="Strong, heat-resistant, requires enclosed printer",
        strength=8,
        flexibility=4,
        ease=6,
        temperature_range=TemperatureRange(220, 250),
        best_for=("Functional parts", "Automotive", "Heat resistance"),
    ),
    MaterialProfile(
        id="PETG",
        name="PETG",
        description="Strong, flexible, food-safe options available",
        strength=8,
        flexibility=7,
        ease=8,
        temperature_range=TemperatureRange(220, 250),
        best_for=("Mechanical parts", "Outdoor use", "Containers"),
    ),
    MaterialProfile(
        id="TPU",
        name="TPU",
        description="Highly flexible, rubber-like, wear resistant",
        strength=7,
        flexibility=10,
        ease=5,
        temperature_range=TemperatureRange(210, 230),
        best_for=("Phone cases", "Seals", "Flexible parts"),
    ),
)

_BY_ID: dict[str, MaterialProfile] = {m.id: m for m in _MATERIALS}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def all_materials() -> tuple[MaterialProfile, ...]:
    """Return every catalog entry in catalog order."""
    return _MATERIALS


def material_ids() -> list[str]:
    """Return the catalog ids in catalog order."""
    return [m.id for m in _MATERIALS]


def get_material(material_id: str) -> MaterialProfile:
    """Look up a material by id (case-insensitive).

    :param material_id: Catalog id such as ``"pla"`` or ``"PETG"``.
    :raises KeyError: If no material has that id.
    """
    try:
        return _BY_ID[material_id.upper()]
    except KeyError:
        known = ", ".join(material_ids())
        raise KeyError(
            f"Unknown material '{material_id}'. Known materials: {known}."
        ) from None
