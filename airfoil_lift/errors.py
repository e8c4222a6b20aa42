"""Exception hierarchy for airfoil_lift."""


class LiftError(Exception):
    """Base class for every error raised by airfoil_lift."""


class InvalidParameters(LiftError, ValueError):
    """Malformed distribution parameters (e.g. low > high, negative stddev)."""


class ShapeMismatch(LiftError, ValueError):
    """Sample curves of unequal (or zero) length."""


class DivisionByZero(LiftError, ZeroDivisionError):
    """Denominator distribution includes or straddles zero."""


class DomainError(LiftError, ValueError):
    """Operation undefined for part of the operand's support (e.g. sqrt of a negative draw)."""


class ConfigurationError(LiftError, ValueError):
    """Invalid propagation settings."""


class MalformedInputRow(LiftError, ValueError):
    """A table row with the wrong column count or a non-numeric token."""

    def __init__(self, message: str, row: int, column=None):
        self.row = row
        self.column = column
        where = f"row {row}" if column is None else f"row {row}, column {column}"
        super().__init__(f"{where}: {message}")


class TableReadError(LiftError):
    """The sample table could not be read."""


class TableNotFound(TableReadError):
    """The sample table path does not exist."""
