"""Render settings.

RenderSettings collects the knobs of a render run (image size, worker pool,
sampling and output path) in one dataclass that the example scripts fill
from their command-line arguments. It can round-trip through a plain dict so
that settings can be stored alongside a rendered image.

Example:
    >>> settings = RenderSettings(width=200, height=100, workers=4)
    >>> settings.validate()
    >>> RenderSettings.from_dict(settings.to_dict()) == settings
    True
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

BACKENDS = ("process", "thread")


@dataclass
class RenderSettings:
    """Settings for one render run.

    Attributes:
        width: Image width in pixels (the original demo canvas is 350x250).
        height: Image height in pixels.
        workers: Worker pool size; None uses all available CPUs.
        backend: "process" or "thread" workers.
        chunk_size: Consecutive pixels per worker job.
        samples_per_axis: Sub-pixel grid size (samples_per_axis**2 rays per
            pixel).
        output: Output image path; the extension selects PNG or PPM.
    """

    width: int = 350
    height: int = 250
    workers: int | None = None
    backend: str = "process"
    chunk_size: int = 1
    samples_per_axis: int = 1
    output: str = "render.png"

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If any setting is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.samples_per_axis < 1:
            raise ValueError(f"samples_per_axis must be >= 1, got {self.samples_per_axis}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderSettings:
        """Build settings from a dict, rejecting unknown keys.

        Raises:
            ValueError: If data contains keys that are not settings.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")
        return cls(**data)
