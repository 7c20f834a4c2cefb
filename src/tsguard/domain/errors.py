"""Exceptions raised by the host engine. The rule core itself never raises across its boundary."""


class TsguardError(Exception):
    """Base class for tsguard errors."""


class ConfigurationError(TsguardError):
    """Raised when [tool.tsguard] holds a value the engine cannot use."""


class UnknownMessageError(TsguardError):
    """Raised when a rule reports a message id its meta does not declare."""

    def __init__(self, rule_id: str, message_id: str) -> None:
        super().__init__(f"Rule '{rule_id}' reported undeclared message id '{message_id}'")
        self.rule_id = rule_id
        self.message_id = message_id


class ParseError(TsguardError):
    """Raised when a file cannot be read or decoded for parsing."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(f"Cannot parse {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason
