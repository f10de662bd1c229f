"""Domain layer: errors, styles, schemas."""

from .errors import (
    ConversionError,
    DecodeError,
    EmptySheetError,
    ErrorCodes,
    ExportFailedError,
    InvalidJobError,
    InvalidStyleError,
    NoFileError,
    NoSheetError,
    UnsupportedValueError,
)
from .schemas import CellValue, ExportJob, ExportOptions, Record, RunLog, SheetSpec
from .styles import (
    AlignmentSpec,
    BorderSpec,
    FillSpec,
    FontSpec,
    ProtectionSpec,
    SideSpec,
    StyleSpec,
)

__all__ = [
    # errors
    "ConversionError",
    "DecodeError",
    "EmptySheetError",
    "ErrorCodes",
    "ExportFailedError",
    "InvalidJobError",
    "InvalidStyleError",
    "NoFileError",
    "NoSheetError",
    "UnsupportedValueError",
    # schemas
    "CellValue",
    "Record",
    "SheetSpec",
    "ExportJob",
    "ExportOptions",
    "RunLog",
    # styles
    "StyleSpec",
    "FontSpec",
    "FillSpec",
    "BorderSpec",
    "SideSpec",
    "AlignmentSpec",
    "ProtectionSpec",
]
