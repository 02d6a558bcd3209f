## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘


class MscError(Exception):
    def __init__(self, message: str = "", *, msc_position=None, msc_instruction=None):
        """Base class for all errors raised by the parser or the machine."""
        super().__init__(message)
        self.msc_position: tuple[int, int] | None = msc_position
        self.msc_instruction: str | None = msc_instruction

class MscParseError(MscError, ValueError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class MscInputExhausted(MscError, EOFError):
    """The program asked for a value with `i` but the input collaborator has none left."""
    pass
