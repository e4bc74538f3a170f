from dataclasses import dataclass, field
from math import ceil

from .._errors import InvalidArgumentError


@dataclass(frozen=True)
class GMLOGConfig:
    """
    The settings of the GM-LOG feature extractor.

    The feature vector layout is derived from these values only, so a trained model and range
    are tied to the config they were trained with.
    """

    num_scales: int = 2  # Number of scale space levels.
    num_bins: int = 10  # Quantization levels per response map.
    sigma: float = 0.5  # Scale of the derivative and LoG filters.
    gm_log_ratio: float = 2.5  # Average ratio of gradient magnitude to LoG response.
    normalization_constant: float = 0.2  # Stabilizing constant of the joint normalization.
    bin_step: float = 0.2  # Width of a quantization bin on the normalized responses.
    conditional_epsilon: float = 1e-4  # Regularizes the conditional probabilities.
    downsample_sigma: float = 1.0  # Smoothing applied before decimating a scale level.
    intensity_scale: float = 255.0  # Intensities in [0,1] are scaled by this before filtering.

    statistics_per_scale: int = field(init=False)
    feature_length: int = field(init=False)
    normalization_sigma: float = field(init=False)
    border: int = field(init=False)
    min_level_side: int = field(init=False)

    def __post_init__(self) -> None:
        """Validate the settings and derive the feature layout."""
        if self.num_scales < 1 or self.num_bins < 1:
            raise InvalidArgumentError(
                f"Scales and bins need to be positive, found {self.num_scales} and {self.num_bins}."
            )
        positive = ("sigma", "gm_log_ratio", "bin_step", "downsample_sigma", "intensity_scale")
        for name in positive:
            if getattr(self, name) <= 0:
                raise InvalidArgumentError(
                    f"{name} needs to be positive, found {getattr(self, name)}."
                )

        # Frozen dataclass, derived fields are set through object.__setattr__.
        object.__setattr__(self, "statistics_per_scale", 4 * self.num_bins)
        object.__setattr__(self, "feature_length", self.num_scales * self.statistics_per_scale)
        object.__setattr__(self, "normalization_sigma", 2 * self.sigma)
        object.__setattr__(self, "border", ceil(3 * self.normalization_sigma))
        object.__setattr__(self, "min_level_side", 2 * self.border + 1)


DEFAULT_GMLOG_CONFIG = GMLOGConfig()
