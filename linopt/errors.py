"""Exception types raised by the package."""


class GeneralError(Exception):
    """Base class of every error raised by the package."""


class WrongSize(GeneralError, ValueError):
    pass


class NotUnitary(GeneralError, ValueError):
    pass


class NotSupported(GeneralError):
    pass