"""Composite run record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .data import RunData, RunParam
from .errors import MissingRunSectionError
from .info import RunInfo


@dataclass(frozen=True)
class Run:
    """
    A tracked run: metadata (info) plus observed data.

    Either section may be missing. Info and data are not cross-checked
    against each other.
    """

    info: Optional[RunInfo] = None
    data: Optional[RunData] = None

    @classmethod
    def from_data(cls, run_data: RunData) -> "Run":
        return cls(info=None, data=run_data)

    @classmethod
    def from_info(cls, run_info: RunInfo) -> "Run":
        return cls(info=run_info, data=None)

    @classmethod
    def from_info_dict(cls, info: Mapping[str, Any]) -> "Run":
        """Build a run with only metadata, parsed from a ``run-info`` object."""
        return cls(info=RunInfo.from_dict(info), data=None)

    @classmethod
    def from_dicts(cls, info: Mapping[str, Any], data: Mapping[str, Any]) -> "Run":
        """Build a run from separate ``run-info`` and ``run-data`` objects."""
        return cls(info=RunInfo.from_dict(info), data=RunData.from_dict(data))

    def get_info(self) -> Optional[RunInfo]:
        return self.info

    def get_data(self) -> Optional[RunData]:
        return self.data

    def get_run_id(self) -> Optional[str]:
        """
        Return the run identifier from the info section.

        Raises:
            MissingRunSectionError: If the run has no info section.
        """
        if self.info is None:
            raise MissingRunSectionError("info")
        return self.info.get_run_id()

    def get_params(self) -> Optional[Dict[str, RunParam]]:
        """
        Return params from the data section.

        Raises:
            MissingRunSectionError: If the run has no data section.
        """
        if self.data is None:
            raise MissingRunSectionError("data")
        return self.data.get_params()
