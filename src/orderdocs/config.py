"""Company branding configuration and render options, loaded from YAML or the environment."""

import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Mapping, Optional
import yaml

from .exceptions import ConfigError


# Environment variable names used by the deployed services
ENV_KEYS = {
    "name": "COMPANYNAME",
    "website": "COMPANYWEBSITE",
    "address_line1": "COMPANYADDRESSLINE1",
    "address_line2": "COMPANYADDRESSLINE2",
    "phone": "COMPANYPHONE",
    "phone_24h": "COMPANY24HOURPHONE",
    "email": "COMPANYEMAIL",
    "logo": "LOGOPATH",
}

REQUIRED_FIELDS = ("name", "address_line1", "address_line2", "phone", "email")


@dataclass(frozen=True)
class CompanyDetails:
    """Branding block printed on every document.

    Passed explicitly into each document builder; nothing here is global.
    """
    name: str
    address_line1: str
    address_line2: str
    phone: str
    email: str
    website: str = ""
    phone_24h: str = ""
    logo: Optional[str] = None  # Path or URL handed to the image loader

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "CompanyDetails":
        """Build from a plain dict, rejecting unknown keys and missing required ones."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError("Unknown company detail fields", ", ".join(unknown))

        missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
        if missing:
            raise ConfigError("Company details not initialized", ", ".join(missing))

        values = {k: (str(v) if v is not None else None) for k, v in data.items()}
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Path) -> "CompanyDetails":
        """Load company details from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigError("Company details file must contain a mapping", str(path))

        # Allow the details to be nested under a top-level "company" key
        if "company" in data and isinstance(data["company"], dict):
            data = data["company"]

        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CompanyDetails":
        """Load company details from COMPANY* / LOGOPATH environment variables."""
        if environ is None:
            environ = os.environ

        data = {}
        for field_name, env_key in ENV_KEYS.items():
            value = environ.get(env_key, "")
            if value:
                data[field_name] = value

        missing = [ENV_KEYS[name] for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise ConfigError(
                "Company details not initialized. Please check environment variables",
                ", ".join(missing),
            )
        return cls.from_mapping(data)

    def to_yaml(self, path: Path) -> None:
        """Save company details to a YAML file."""
        with open(path, "w") as f:
            yaml.dump({"company": asdict(self)}, f, default_flow_style=False, sort_keys=False)


@dataclass(frozen=True)
class RenderOptions:
    """Knobs shared by every document builder."""
    invariant: bool = True  # Deterministic PDF bytes (no timestamps or random IDs)
    author: str = ""
    line_thickness: float = 0.8  # Page and table border stroke, in mm


def load_company_details(path: Optional[Path] = None) -> CompanyDetails:
    """Load company details from path, or from the environment when no path is given."""
    if path is None:
        return CompanyDetails.from_env()
    return CompanyDetails.from_yaml(path)
