"""Material configuration strings.

A configuration string names a material data file followed by optional
``name=value`` parameters, separated by semicolons::

    "Al2O3_sg167.ncmat;temp=250K;packfact=0.6"

Recognised parameters:
    temp: Temperature, optional unit suffix K (default) or C, stored in K
    packfact: Packing factor in (0, 1]
    dcutoff: d-spacing cutoff [Aa], >= 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from xtal_scatter.config.yaml_loader import get_default
from xtal_scatter.config.defaults import DEFAULT_DCUTOFF, DEFAULT_PACKFACT
from xtal_scatter.core.constants import CELSIUS_OFFSET
from xtal_scatter.core.errors import BadInput

_PARAMETER_ORDER = ("temp", "packfact", "dcutoff")


def _parse_float(name: str, text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise BadInput(f"Invalid value for parameter {name!r}: {text!r}") from None


def _parse_temperature(text: str) -> float:
    """Parse a temperature with optional K/C suffix into kelvin."""
    if text.endswith("K"):
        kelvin = _parse_float("temp", text[:-1].strip())
    elif text.endswith("C"):
        kelvin = _parse_float("temp", text[:-1].strip()) + CELSIUS_OFFSET
    else:
        kelvin = _parse_float("temp", text)
    if not kelvin > 0:
        raise BadInput(f"Temperature must be positive: temp={text}")
    return kelvin


@dataclass(frozen=True)
class MaterialConfig:
    """Parsed material configuration.

    Attributes:
        datafile: Name of the material data entry
        temp: Temperature [K], None when not set
        packfact: Packing factor (1.0 = ideal crystal density)
        dcutoff: d-spacing cutoff [Aa] passed on to physics models
        text: The configuration string exactly as given

    """

    datafile: str
    temp: Optional[float] = None
    packfact: float = DEFAULT_PACKFACT
    dcutoff: float = DEFAULT_DCUTOFF
    text: str = ""

    def __post_init__(self):
        """Validate parameter ranges."""
        if not self.datafile:
            raise BadInput("Material configuration lacks a data file name")
        if self.temp is not None and not self.temp > 0:
            raise BadInput(f"Temperature must be positive: temp={self.temp}")
        if not (0.0 < self.packfact <= 1.0):
            raise BadInput(f"Packing factor must be in (0, 1]: packfact={self.packfact}")
        if self.dcutoff < 0:
            raise BadInput(f"dcutoff must be non-negative: dcutoff={self.dcutoff}")

    @classmethod
    def from_string(cls, text: str) -> "MaterialConfig":
        """Parse a configuration string.

        Args:
            text: Configuration string, e.g. "Al.ncmat;temp=20C"

        Returns:
            MaterialConfig instance

        Raises:
            BadInput: If the string is malformed or a value is out of range

        """
        if not isinstance(text, str):
            raise BadInput(f"Material configuration must be a string, got {type(text).__name__}")

        datafile, *tokens = [part.strip() for part in text.split(";")]
        params: dict = {}
        for token in tokens:
            if not token:
                continue
            if "=" not in token:
                raise BadInput(f"Invalid parameter syntax (expected name=value): {token!r}")
            name, value = (s.strip() for s in token.split("=", 1))
            if name not in _PARAMETER_ORDER:
                raise BadInput(f"Unknown parameter {name!r} in material configuration")
            if name in params:
                raise BadInput(f"Parameter {name!r} specified more than once")
            if name == "temp":
                params[name] = _parse_temperature(value)
            else:
                params[name] = _parse_float(name, value)

        params.setdefault("packfact", get_default("matcfg.packfact", DEFAULT_PACKFACT))
        params.setdefault("dcutoff", get_default("matcfg.dcutoff", DEFAULT_DCUTOFF))
        return cls(datafile=datafile, text=text, **params)

    def to_str_cfg(self) -> str:
        """Normalized configuration string (data file plus non-default parameters)."""
        parts = [self.datafile]
        if self.temp is not None:
            parts.append(f"temp={self.temp:g}K")
        if self.packfact != DEFAULT_PACKFACT:
            parts.append(f"packfact={self.packfact:g}")
        if self.dcutoff != DEFAULT_DCUTOFF:
            parts.append(f"dcutoff={self.dcutoff:g}")
        return ";".join(parts)

    def __str__(self) -> str:
        return self.text or self.to_str_cfg()
