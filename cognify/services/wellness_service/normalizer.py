"""Z-score normalization of the feature vector.

The mean/std constants are a versioned training artifact. They must line
up index-for-index with FEATURE_NAMES, so parameters are checked when
they are built or loaded rather than at prediction time.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .config import (
    FEATURE_COUNT,
    FEATURE_MEANS,
    FEATURE_NAMES,
    FEATURE_STDS,
    NORMALIZATION_VERSION,
)
from .errors import ModelLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationParameters:
    """Per-feature StandardScaler mean and standard deviation."""
    version: str
    means: Tuple[float, ...]
    stds: Tuple[float, ...]
    feature_names: Tuple[str, ...] = FEATURE_NAMES

    def __post_init__(self):
        if len(self.means) != FEATURE_COUNT or len(self.stds) != FEATURE_COUNT:
            raise ModelLoadError(
                f"Normalization {self.version} has {len(self.means)} means and "
                f"{len(self.stds)} stds, expected {FEATURE_COUNT}"
            )
        if tuple(self.feature_names) != FEATURE_NAMES:
            raise ModelLoadError(
                f"Normalization {self.version} feature order does not match the model inputs"
            )
        if any(std == 0 for std in self.stds):
            raise ModelLoadError(f"Normalization {self.version} contains a zero std")

    @classmethod
    def default(cls) -> "NormalizationParameters":
        """Constants shipped with the current model artifacts."""
        return cls(
            version=NORMALIZATION_VERSION,
            means=FEATURE_MEANS,
            stds=FEATURE_STDS,
        )

    @classmethod
    def from_file(cls, path: str) -> "NormalizationParameters":
        """Load parameters from a JSON artifact.

        Expected keys: version, feature_names, means, stds.

        Raises:
            ModelLoadError: If the file is missing, unreadable or mismatched
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                doc = json.load(f)
            params = cls(
                version=str(doc["version"]),
                means=tuple(float(v) for v in doc["means"]),
                stds=tuple(float(v) for v in doc["stds"]),
                feature_names=tuple(doc.get("feature_names", FEATURE_NAMES)),
            )
        except ModelLoadError:
            raise
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(
                "NORMALIZATION_LOAD_FAILED",
                extra={"path": path, "error": str(e)}
            )
            raise ModelLoadError(f"Could not load normalization parameters from {path}: {e}") from e

        logger.info(
            "NORMALIZATION_LOADED",
            extra={"path": path, "version": params.version}
        )
        return params


class Normalizer:
    """Applies (x - mean) / std element-wise."""

    def __init__(self, parameters: Optional[NormalizationParameters] = None):
        self.parameters = parameters or NormalizationParameters.default()
        self._means = np.asarray(self.parameters.means, dtype=np.float64)
        self._stds = np.asarray(self.parameters.stds, dtype=np.float64)

    @property
    def version(self) -> str:
        return self.parameters.version

    def transform(self, features: Sequence[float]) -> np.ndarray:
        """Normalize a 28-feature vector.

        Returns:
            New float array; the input is not modified
        """
        values = np.asarray(features, dtype=np.float64)
        if values.shape != (FEATURE_COUNT,):
            raise ValueError(f"Expected {FEATURE_COUNT} features, got shape {values.shape}")
        return (values - self._means) / self._stds
