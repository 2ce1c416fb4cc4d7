"""Domain errors raised by value-object and entity factories."""

# Rule names carried by ValidationError.rule.
RULE_EMPTY = "empty"
RULE_TOO_LONG = "too_long"
RULE_OUT_OF_RANGE = "out_of_range"
RULE_NOT_INTEGER = "not_integer"
RULE_INVALID_FORMAT = "invalid_format"
RULE_INVALID_CHOICE = "invalid_choice"


class ValidationError(ValueError):
    """Input violates an invariant of a value object or entity.

    Always raised at construction time. `field` names the offending input,
    `rule` names the violated rule (see the RULE_* constants).
    """

    def __init__(self, field: str, rule: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.rule = rule
