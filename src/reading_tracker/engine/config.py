"""
Module: engine.config

Purpose:
    Configuration dataclasses for the engine. Provides immutable settings
    for excerpt sizing around the continuation point.

Key Classes:
    - ContinuationConfig: Excerpt window, lookback and boundary search sizes
    - EngineConfig: Top-level configuration

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - engine.continuation: Sizes the excerpt
    - reading_tracker.engine: Re-exported for callers that tune excerpts
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContinuationConfig:
    """
    Configuration for locating and sizing the continuation excerpt.

    All sizes are UTF-16 code units.

    Attributes:
        window_units: Target excerpt length from its start. Defaults to 500.
        lookback_units: How far before the furthest read position a
            "current" excerpt starts. Defaults to 250.
        boundary_search_units: Half-width of the window around the target
            end searched for a newline or sentence end. Defaults to 50.
    """
    window_units: int = 500
    lookback_units: int = 250
    boundary_search_units: int = 50

    def __post_init__(self) -> None:
        if self.window_units <= 0:
            raise ValueError(f"window_units must be positive: {self.window_units}")
        if self.lookback_units < 0:
            raise ValueError(f"lookback_units must be non-negative: {self.lookback_units}")
        if self.boundary_search_units < 0:
            raise ValueError(f"boundary_search_units must be non-negative: {self.boundary_search_units}")


@dataclass(frozen=True)
class EngineConfig:
    """
    Configuration for the engine.

    Attributes:
        continuation: Excerpt settings (default ContinuationConfig())
    """
    continuation: ContinuationConfig = field(default_factory=ContinuationConfig)


DEFAULT_CONFIG = EngineConfig()
