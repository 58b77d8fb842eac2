class PromptPayError(ValueError):
    """Base error for payload building and parsing."""


class MissingFieldError(PromptPayError):
    def __init__(self, *fields: str):
        self.fields = fields
        super().__init__(f"Missing required field(s): {', '.join(fields)}")


class OversizedFieldError(PromptPayError):
    def __init__(self, tag: str, length: int):
        self.tag = tag
        self.length = length
        super().__init__(f"Value for tag {tag} is {length} bytes, max is 99")


class PayloadError(PromptPayError):
    """Raised when a payload string can't be read back as TLV."""


class InvalidAmountError(PromptPayError):
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount!r}")
