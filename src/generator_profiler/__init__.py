"""Step-level timing for generator functions."""

from importlib import import_module
from typing import Any, Dict, Iterable, Tuple

__version__ = "0.1.0"

__all__ = [
    "MeasureSummary",
    "NullPerformance",
    "Performance",
    "PerformanceEntry",
    "PerformanceTimeline",
    "ProfiledGenerator",
    "ProfilerConfig",
    "StepResult",
    "UnknownMarkError",
    "allocate_generator_id",
    "init_profiling",
    "load_profiler_config",
    "profile",
    "profiled",
    "reset_counter",
    "summarize_measures",
]

_EXPORTS: Dict[str, Tuple[str, ...]] = {
    "config": ("ProfilerConfig", "init_profiling", "load_profiler_config"),
    "counter": ("allocate_generator_id", "reset_counter"),
    "profiler": ("ProfiledGenerator", "StepResult", "profile", "profiled"),
    "timeline": (
        "MeasureSummary",
        "NullPerformance",
        "Performance",
        "PerformanceEntry",
        "PerformanceTimeline",
        "UnknownMarkError",
        "summarize_measures",
    ),
}


def __getattr__(name: str) -> Any:
    for module_name, symbols in _EXPORTS.items():
        if name in symbols:
            module = import_module(f"{__name__}.{module_name}")
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> Iterable[str]:
    return sorted(set(__all__))
