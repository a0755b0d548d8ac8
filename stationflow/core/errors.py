"""Custom exceptions used across StationFlow."""


class StationFlowError(Exception):
    """Base error for the application."""


class ConfigError(StationFlowError):
    """Configuration related error."""


class EmptyInputError(StationFlowError):
    """Raised when no file or no sheet was supplied for processing."""


class MissingColumnError(StationFlowError):
    """Raised when a sheet has no station-like column."""

    def __init__(self, sheet: str, field: str = "STATION") -> None:
        super().__init__(f'Sheet "{sheet}" does not have a {field} column')
        self.sheet = sheet
        self.field = field


class InvalidMappingFormatError(StationFlowError):
    """Raised when division mapping text cannot be parsed into the expected shape."""


class WorkbookReadError(StationFlowError):
    """Raised when the input workbook cannot be parsed."""
