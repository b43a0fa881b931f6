class FeedAsciiError(Exception):
    """Base class for failures that end a render with exit status 1."""


class UsageError(FeedAsciiError):
    pass


class NetworkError(FeedAsciiError):
    pass


class DataError(FeedAsciiError):
    pass


class DecodeError(FeedAsciiError):
    pass
