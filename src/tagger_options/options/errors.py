"""Exceptions raised while loading tagger options."""

from typing import Optional


class TaggerOptionsError(Exception):
    """Base class for tagger option errors"""
    pass


class TextFormatError(TaggerOptionsError):
    """Error in a text option file, located by line number"""

    reason = "invalid option line"

    def __init__(self, line_number: int = 0, detail: str = "", source: Optional[str] = None):
        self.line_number = line_number
        self.detail = detail
        self.source = source
        super().__init__(self._message())

    def _message(self) -> str:
        location = f"line {self.line_number}"
        if self.source:
            location = f"{self.source}:{self.line_number}"
        message = f"{location}: {self.reason}"
        if self.detail:
            message += f": {self.detail}"
        return message

    def at_line(self, line_number: int) -> "TextFormatError":
        """Record the number of the line being parsed."""
        self.line_number = line_number
        self.args = (self._message(),)
        return self

    def with_source(self, source: str) -> "TextFormatError":
        """Attach the file name the failing line came from."""
        self.source = str(source)
        self.args = (self._message(),)
        return self


class OptionsSyntaxError(TextFormatError):
    """Unknown option name or unknown symbolic value"""

    reason = "syntax error"


class NumericalRangeError(TextFormatError):
    """Negative value for an option that must be non-negative"""

    reason = "value out of range"


class ReadFailedError(TaggerOptionsError):
    """Binary stream failed while reading the option vectors"""
    pass


class BadBinaryError(TaggerOptionsError):
    """Binary option data is malformed"""
    pass
