from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

from .resources import parse_schema_version, schema_version_text


def safe_dist_version(dist_name: str) -> str:
    try:
        return package_version(dist_name)
    except PackageNotFoundError:
        return "0.0.0+unknown"


OCPTV_DIST_VERSION: str = safe_dist_version("ocptv")


@dataclass(frozen=True, slots=True)
class ContractVersionInfo:
    spec_version: str
    major: int
    minor: int
    dist_version: str


@lru_cache(maxsize=1)
def spec_version() -> tuple[int, int]:
    """
    (major, minor) of the output specification this package emits.
    """
    return parse_schema_version(schema_version_text())


def get_contract_version_info() -> ContractVersionInfo:
    major, minor = spec_version()
    return ContractVersionInfo(
        spec_version=f"{major}.{minor}",
        major=major,
        minor=minor,
        dist_version=OCPTV_DIST_VERSION,
    )
