"""Palette generator: pick the six role swatches from quantized colors."""

from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..utils.color import approx_ge, approx_le
from ..utils.logging import get_logger
from .swatch import Swatch

logger = get_logger(__name__)

TARGET_DARK_LUMA = 0.26
MAX_DARK_LUMA = 0.45

MIN_LIGHT_LUMA = 0.55
TARGET_LIGHT_LUMA = 0.74

MIN_NORMAL_LUMA = 0.3
TARGET_NORMAL_LUMA = 0.5
MAX_NORMAL_LUMA = 0.7

TARGET_MUTED_SATURATION = 0.3
MAX_MUTED_SATURATION = 0.4

TARGET_VIBRANT_SATURATION = 1.0
MIN_VIBRANT_SATURATION = 0.35


class Role(str, Enum):
    """Named palette roles, in selection order."""

    VIBRANT = "vibrant"
    LIGHT_VIBRANT = "light_vibrant"
    DARK_VIBRANT = "dark_vibrant"
    MUTED = "muted"
    LIGHT_MUTED = "light_muted"
    DARK_MUTED = "dark_muted"


class RoleTarget(BaseModel):
    """Inclusive saturation/luma window and the ideal values inside it."""

    model_config = ConfigDict(frozen=True)

    min_luma: float = Field(ge=0.0, le=1.0)
    target_luma: float = Field(ge=0.0, le=1.0)
    max_luma: float = Field(ge=0.0, le=1.0)
    min_saturation: float = Field(ge=0.0, le=1.0)
    target_saturation: float = Field(ge=0.0, le=1.0)
    max_saturation: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_order(self) -> "RoleTarget":
        if not self.min_luma <= self.target_luma <= self.max_luma:
            raise ValueError("luma must satisfy min_luma <= target_luma <= max_luma")
        if not self.min_saturation <= self.target_saturation <= self.max_saturation:
            raise ValueError(
                "saturation must satisfy min_saturation <= target_saturation <= max_saturation"
            )
        return self

    def contains(self, saturation: float, luma: float) -> bool:
        return (
            approx_ge(saturation, self.min_saturation)
            and approx_le(saturation, self.max_saturation)
            and approx_ge(luma, self.min_luma)
            and approx_le(luma, self.max_luma)
        )


def _vibrant(min_luma: float, target_luma: float, max_luma: float) -> RoleTarget:
    return RoleTarget(
        min_luma=min_luma,
        target_luma=target_luma,
        max_luma=max_luma,
        min_saturation=MIN_VIBRANT_SATURATION,
        target_saturation=TARGET_VIBRANT_SATURATION,
        max_saturation=1.0,
    )


def _muted(min_luma: float, target_luma: float, max_luma: float) -> RoleTarget:
    return RoleTarget(
        min_luma=min_luma,
        target_luma=target_luma,
        max_luma=max_luma,
        min_saturation=0.0,
        target_saturation=TARGET_MUTED_SATURATION,
        max_saturation=MAX_MUTED_SATURATION,
    )


class RoleTargets(BaseModel):
    """One target window per role."""

    model_config = ConfigDict(frozen=True)

    vibrant: RoleTarget = _vibrant(MIN_NORMAL_LUMA, TARGET_NORMAL_LUMA, MAX_NORMAL_LUMA)
    light_vibrant: RoleTarget = _vibrant(MIN_LIGHT_LUMA, TARGET_LIGHT_LUMA, 1.0)
    dark_vibrant: RoleTarget = _vibrant(0.0, TARGET_DARK_LUMA, MAX_DARK_LUMA)
    muted: RoleTarget = _muted(MIN_NORMAL_LUMA, TARGET_NORMAL_LUMA, MAX_NORMAL_LUMA)
    light_muted: RoleTarget = _muted(MIN_LIGHT_LUMA, TARGET_LIGHT_LUMA, 1.0)
    dark_muted: RoleTarget = _muted(0.0, TARGET_DARK_LUMA, MAX_DARK_LUMA)

    def for_role(self, role: Role) -> RoleTarget:
        return getattr(self, role.value)


class ScoringWeights(BaseModel):
    """Weights of the terms in a candidate's score."""

    model_config = ConfigDict(frozen=True)

    saturation: float = Field(default=3.0, ge=0.0)
    luma: float = Field(default=6.0, ge=0.0)
    population: float = Field(default=1.0, ge=0.0)


def invert_diff(value: float, target_value: float) -> float:
    return 1.0 - abs(value - target_value)


def weighted_mean(*values: float) -> float:
    """Weighted mean of ``value, weight`` pairs given as a flat argument list."""
    if len(values) % 2:
        raise ValueError("weighted_mean expects value/weight pairs")

    total = 0.0
    total_weight = 0.0
    for i in range(0, len(values), 2):
        total += values[i] * values[i + 1]
        total_weight += values[i + 1]

    if total_weight == 0:
        return 0.0
    return total / total_weight


def create_comparison_value(
    saturation: float,
    target_saturation: float,
    saturation_weight: float,
    luma: float,
    target_luma: float,
    luma_weight: float,
    population: int,
    max_population: int,
    population_weight: float,
) -> float:
    population_ratio = population / max_population if max_population > 0 else 0.0
    return weighted_mean(
        invert_diff(saturation, target_saturation), saturation_weight,
        invert_diff(luma, target_luma), luma_weight,
        population_ratio, population_weight,
    )


class PaletteGenerator:
    """Select and synthesize role swatches from a list of swatches.

    Roles are searched in :class:`Role` order. A swatch picked for one role
    is excluded from later roles by identity, so equal-valued swatches at
    different positions can still fill different roles.
    """

    def __init__(
        self,
        targets: Optional[RoleTargets] = None,
        weights: Optional[ScoringWeights] = None,
    ):
        self.targets = targets or RoleTargets()
        self.weights = weights or ScoringWeights()

        self.swatches: List[Swatch] = []
        self.highest_population = 0
        self.roles: Dict[Role, Optional[Swatch]] = {role: None for role in Role}
        self.scores: Dict[Role, float] = {}
        self._selected_indices: Set[int] = set()

    def generate(self, swatches: Sequence[Swatch]) -> Dict[Role, Optional[Swatch]]:
        """Run role selection and gap filling.

        Args:
            swatches: Candidate swatches, usually from the quantizer

        Returns:
            Mapping of every role to its swatch, or None when unset
        """
        self.swatches = list(swatches)
        self.highest_population = self._find_max_population()
        self.roles = {role: None for role in Role}
        self.scores = {}
        self._selected_indices = set()

        self._generate_variation_colors()
        self._generate_empty_swatches()

        logger.debug(
            "Roles: "
            + ", ".join(
                f"{role.value}={swatch.hex if swatch else None}"
                for role, swatch in self.roles.items()
            )
        )
        return dict(self.roles)

    def _find_max_population(self) -> int:
        return max((swatch.population for swatch in self.swatches), default=0)

    def _generate_variation_colors(self) -> None:
        for role in Role:
            found = self._find_color_variation(self.targets.for_role(role))
            if found is not None:
                index, score = found
                self._selected_indices.add(index)
                self.roles[role] = self.swatches[index]
                self.scores[role] = score

    def _find_color_variation(self, target: RoleTarget) -> Optional[Tuple[int, float]]:
        """Index and score of the best unselected swatch inside ``target``'s window."""
        best_index: Optional[int] = None
        best_value = 0.0

        for index, swatch in enumerate(self.swatches):
            if index in self._selected_indices:
                continue

            _, sat, luma = swatch.hsl
            if not target.contains(sat, luma):
                continue

            value = create_comparison_value(
                sat, target.target_saturation, self.weights.saturation,
                luma, target.target_luma, self.weights.luma,
                swatch.population, self.highest_population, self.weights.population,
            )
            if best_index is None or value > best_value:
                best_index = index
                best_value = value

        if best_index is None:
            return None
        return best_index, best_value

    def _with_luma(self, source: Swatch, luma: float) -> Swatch:
        hue, saturation, _ = source.hsl
        return Swatch.from_hsl((hue, saturation, luma), population=0)

    def _generate_empty_swatches(self) -> None:
        vibrant = self.roles[Role.VIBRANT]
        dark_vibrant = self.roles[Role.DARK_VIBRANT]

        if vibrant is None and dark_vibrant is not None:
            vibrant = self._with_luma(dark_vibrant, self.targets.vibrant.target_luma)
            self.roles[Role.VIBRANT] = vibrant

        if self.roles[Role.DARK_VIBRANT] is None and vibrant is not None:
            self.roles[Role.DARK_VIBRANT] = self._with_luma(
                vibrant, self.targets.dark_vibrant.target_luma
            )

        if self.roles[Role.LIGHT_VIBRANT] is None and vibrant is not None:
            self.roles[Role.LIGHT_VIBRANT] = self._with_luma(
                vibrant, self.targets.light_vibrant.target_luma
            )
