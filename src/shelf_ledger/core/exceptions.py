class ShelfLedgerError(Exception):
    """Base exception for the shelf ledger"""

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidLocationError(ShelfLedgerError):
    """Raised when a grid location cannot be parsed or is out of bounds"""

    def __init__(self, message: str, field: str):
        self.field = field
        super().__init__(message, error_code="INVALID_LOCATION")


class MalformedImportHeaderError(ShelfLedgerError):
    """Raised when a bulk import header does not match the required columns.

    Aborts the whole import before any row is processed.
    """

    def __init__(self, import_kind: str, expected: tuple[str, ...], actual: list[str]):
        self.import_kind = import_kind
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid {import_kind} header: expected {list(expected)}, got {actual}",
            error_code="MALFORMED_IMPORT_HEADER",
        )


class LedgerInvariantError(ShelfLedgerError):
    """Raised when a ledger no longer satisfies its aggregate invariants"""

    def __init__(self, message: str, code: str):
        self.code = code
        super().__init__(message, error_code="LEDGER_INVARIANT_VIOLATION")


class ConfigError(ShelfLedgerError):
    def __init__(self, message: str):
        super().__init__(message, error_code="CONFIGURATION_ERROR")


class ConfigFileNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


class ConfigValidationError(ConfigError):
    pass


class MissingEnvironmentVariableError(ConfigError):
    def __init__(self, var_name: str, key_path: str):
        self.var_name = var_name
        super().__init__(
            f"Missing env var '{var_name}' referenced at '{key_path}'. "
            f"Define it in .env or export it in the environment."
        )
