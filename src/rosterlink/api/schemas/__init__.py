"""Pydantic models for API I/O."""

from .exposure import ExposureRequest, ExposureResponse, RostersResponse
from .imports import CsvImportRequest, ImportResponse, SleeperImportRequest

__all__ = [
    "CsvImportRequest",
    "ExposureRequest",
    "ExposureResponse",
    "ImportResponse",
    "RostersResponse",
    "SleeperImportRequest",
]
