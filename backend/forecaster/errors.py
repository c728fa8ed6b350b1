from __future__ import annotations


class ChainedError(Exception):
    """Exception whose text includes every cause it was raised from.

    ``str(err)`` renders ``"<message>: <cause>"`` walking ``__cause__`` so the
    full chain can be shown verbatim to API callers.
    """

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is None:
            return message
        return f"{message}: {describe_error(self.__cause__)}"


class ProviderError(ChainedError):
    """Raised by a forecast provider: transport, status or schema failure."""


class AggregationError(ChainedError):
    """Raised by the forecast hub when any provider fails."""


def describe_error(exc: BaseException) -> str:
    if isinstance(exc, ChainedError):
        return str(exc)
    text = str(exc) or exc.__class__.__name__
    if exc.__cause__ is not None:
        return f"{text}: {describe_error(exc.__cause__)}"
    return text
