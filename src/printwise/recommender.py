"""Filament recommendation and print-setting derivation.

Scores every catalog material against the user's preferences, picks the
best one, and derives the print settings that go with it.  Everything in
this module is a pure function of its arguments and the immutable
catalog, so calls are idempotent and safe to run concurrently.

Scoring, per material::

    -|strength delta| - |flexibility delta| + 0.5 * ease + bonus

Bonuses stack:

    +5  outdoor use and PETG
    +5  food safe and PETG
    +8  flexibility above 7 and TPU
    +3  strength above 7 and ABS or PETG

Selection starts from ``(0, "PLA")`` and only a strictly higher score
replaces the current best.  When nothing scores above zero the result is
PLA with a score of 0, whatever the fit.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from functools import reduce
from typing import Any

from printwise.catalog import MaterialProfile, all_materials, get_material

logger = logging.getLogger(__name__)

_DEFAULT_MATERIAL_ID = "PLA"
_INITIAL_BEST_SCORE = 0.0

_EASE_WEIGHT = 0.5
_OUTDOOR_BONUS = 5.0
_FOOD_SAFE_BONUS = 5.0
_FLEXIBLE_BONUS = 8.0
_STRONG_BONUS = 3.0

_FLEXIBILITY_THRESHOLD = 7
_STRENGTH_THRESHOLD = 7
_DETAIL_THRESHOLD = 7


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PreferenceInput:
    """One submission of the preference form.

    Slider values are expected in 1-10; the caller clamps them.
    ``project_description`` gates the submission and is not scored.
    """

    strength: int
    flexibility: int
    detail: int
    outdoor: bool = False
    food_safe: bool = False
    project_description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SettingRange:
    """A labeled numeric range such as ``50-60 mm/s`` or ``15-20%``."""

    low: int
    high: int
    unit: str

    @property
    def label(self) -> str:
        sep = "" if self.unit == "%" else " "
        return f"{self.low}-{self.high}{sep}{self.unit}"


@dataclass(frozen=True)
class PrintSettings:
    """Print parameters derived for the chosen material."""

    nozzle_temperature: int  # °C
    bed_temperature: int  # °C
    print_speed: SettingRange
    layer_height: float  # mm
    infill_percent: SettingRange

    def to_dict(self) -> dict[str, Any]:
        return {
            "nozzle_temperature": self.nozzle_temperature,
            "bed_temperature": self.bed_temperature,
            "print_speed": self.print_speed.label,
            "layer_height": self.layer_height,
            "infill_percent": self.infill_percent.label,
        }


@dataclass(frozen=True)
class CandidateScore:
    """The score one catalog material received for a submission."""

    material: MaterialProfile
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {"material": self.material.id, "score": self.score}


@dataclass(frozen=True)
class Recommendation:
    """The chosen material, its settings, and the winning score."""

    chosen_material: MaterialProfile
    settings: PrintSettings
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "chosen_material": self.chosen_material.to_dict(),
            "settings": self.settings.to_dict(),
            "score": self.score,
        }


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def _bonus(material: MaterialProfile, preferences: PreferenceInput) -> float:
    bonus = 0.0
    if preferences.outdoor and material.id == "PETG":
        bonus += _OUTDOOR_BONUS
    if preferences.food_safe and material.id == "PETG":
        bonus += _FOOD_SAFE_BONUS
    if preferences.flexibility > _FLEXIBILITY_THRESHOLD and material.id == "TPU":
        bonus += _FLEXIBLE_BONUS
    if preferences.strength > _STRENGTH_THRESHOLD and material.id in ("ABS", "PETG"):
        bonus += _STRONG_BONUS
    return bonus


def score_material(material: MaterialProfile, preferences: PreferenceInput) -> float:
    """Score a single material against *preferences* (higher is better)."""
    score = 0.0
    score -= abs(material.strength - preferences.strength)
    score -= abs(material.flexibility - preferences.flexibility)
    score += _EASE_WEIGHT * material.ease
    score += _bonus(material, preferences)
    return score


def score_candidates(preferences: PreferenceInput) -> tuple[CandidateScore, ...]:
    """Score every catalog material, preserving catalog order."""
    candidates = tuple(
        CandidateScore(material=m, score=score_material(m, preferences))
        for m in all_materials()
    )
    for candidate in candidates:
        logger.debug("Scored %s: %.1f", candidate.material.id, candidate.score)
    return candidates


def _keep_best(best: tuple[float, str], candidate: CandidateScore) -> tuple[float, str]:
    # Strictly greater: the earlier material keeps a tie.
    if candidate.score > best[0]:
        return candidate.score, candidate.material.id
    return best


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def _bed_temperature(material_id: str) -> int:
    if material_id == "ABS":
        return 100
    if material_id == "TPU":
        return 50
    return 60


def _print_speed(material_id: str, detail: int) -> SettingRange:
    if material_id == "TPU":
        return SettingRange(20, 30, "mm/s")
    if detail > _DETAIL_THRESHOLD:
        return SettingRange(40, 50, "mm/s")
    return SettingRange(50, 60, "mm/s")


def derive_settings(material: MaterialProfile, preferences: PreferenceInput) -> PrintSettings:
    """Derive print settings for *material* given the detail and strength sliders."""
    high_detail = preferences.detail > _DETAIL_THRESHOLD
    return PrintSettings(
        nozzle_temperature=material.temperature_range.min_c,
        bed_temperature=_bed_temperature(material.id),
        print_speed=_print_speed(material.id, preferences.detail),
        layer_height=0.12 if high_detail else 0.20,
        infill_percent=(
            SettingRange(40, 50, "%")
            if preferences.strength > _STRENGTH_THRESHOLD
            else SettingRange(15, 20, "%")
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def recommend(preferences: PreferenceInput) -> Recommendation:
    """Pick the best catalog material for *preferences* and derive its settings.

    :param preferences: Clamped slider values and constraints for one
        submission.
    :returns: A fresh :class:`Recommendation`.  ``score`` is the winning
        score, or ``0`` when no material beat the PLA default.
    """
    best_score, best_id = reduce(
        _keep_best,
        score_candidates(preferences),
        (_INITIAL_BEST_SCORE, _DEFAULT_MATERIAL_ID),
    )
    material = get_material(best_id)
    logger.info("Recommended %s (score %.1f)", material.id, best_score)
    return Recommendation(
        chosen_material=material,
        settings=derive_settings(material, preferences),
        score=best_score,
    )
