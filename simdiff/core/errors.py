"""
Exceptions that halt a comparison.

Only these two conditions stop the pipeline. Anything else (a sentence
that cannot be embedded, vectors of different lengths) degrades to a
fallback value inside the module where it happens.
"""


class ComparisonError(Exception):
    """Raised when the comparison pipeline fails."""
    pass


class InvalidRequestError(ComparisonError):
    """Raised when document input is missing or malformed."""
    pass


class ExtractionEmptyError(ComparisonError):
    """
    Raised when a document yields no usable sentences.

    Attributes:
        document: Which document failed ("source", "target" or a title)
    """

    def __init__(self, document: str, reason: str = "no usable sentences"):
        self.document = document
        self.reason = reason
        super().__init__(f"{document} document yielded {reason}")
