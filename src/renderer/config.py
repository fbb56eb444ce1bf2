# renderer/config.py
import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

TONE_MAPPER_NAMES = ("clamp", "reinhard")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ENV_PREFIX = "RAYTRACER_"


class ConfigError(ValueError):
    """Invalid render settings."""


def _default_workers() -> int:
    return os.cpu_count() or 1


@dataclass
class RenderSettings:
    """
    Image and renderer parameters.

    shadow_bias is handed to the Scene; background is the linear color of
    rays that hit nothing. exposure, gamma and tone_mapper control the
    conversion of the unclamped float image to 8-bit pixels.
    """
    width: int = 320
    height: int = 240
    workers: int = field(default_factory=_default_workers)
    background: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    shadow_bias: float = 1e-4
    tone_mapper: str = "clamp"
    exposure: float = 1.0
    gamma: float = 1.0
    log_level: str = "INFO"

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"image size must be positive, got {self.width}x{self.height}")
        if self.workers <= 0:
            raise ConfigError(f"workers must be positive, got {self.workers}")
        if len(self.background) != 3:
            raise ConfigError(f"background needs 3 components, got {self.background!r}")
        if self.shadow_bias < 0:
            raise ConfigError(f"shadow_bias must be non-negative, got {self.shadow_bias}")
        if self.tone_mapper not in TONE_MAPPER_NAMES:
            raise ConfigError(f"unknown tone mapper {self.tone_mapper!r}, "
                              f"expected one of {', '.join(TONE_MAPPER_NAMES)}")
        if self.exposure <= 0 or self.gamma <= 0:
            raise ConfigError("exposure and gamma must be positive")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RenderSettings":
        known = {f.name: f for f in fields(cls)}
        unknown = set(data) - set(known)
        if unknown:
            raise ConfigError(f"unknown settings: {', '.join(sorted(unknown))}")
        kwargs = {}
        for name, value in data.items():
            kwargs[name] = _coerce(name, known[name].type, value)
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RenderSettings":
        """Reads RAYTRACER_WIDTH, RAYTRACER_SHADOW_BIAS, ... from the environment."""
        if environ is None:
            environ = os.environ
        data = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key in environ:
                data[f.name] = environ[key]
        return cls.from_dict(data)


def _coerce(name: str, type_hint, value):
    try:
        if type_hint in (int, "int"):
            return int(value)
        if type_hint in (float, "float"):
            return float(value)
        if type_hint in (str, "str"):
            return str(value)
        # background: "r,g,b" string or a sequence of three numbers.
        if isinstance(value, str):
            value = value.split(',')
        return tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid value for {name}: {value!r}") from e
