"""Error taxonomy for the signal pipeline and its collaborators."""


class CrossoverBotError(Exception):
    """Base class for all errors raised by the signal bot."""


class ProviderError(CrossoverBotError):
    """Market data provider failed (network, timeout, unsupported symbol)."""


class ConnectivityError(ProviderError):
    """Market data provider is not reachable."""


class InsufficientDataError(CrossoverBotError):
    """Not enough history to compute the moving averages.

    Never surfaced to users: the analysis cycle aborts silently.
    """


class DeliveryError(CrossoverBotError):
    """Notifier could not deliver a message."""


class LifecycleError(CrossoverBotError):
    """Invalid lifecycle transition requested."""


class AlreadyActiveError(LifecycleError):
    """start() called while the bot is already active."""

    def __init__(self, message: str = "Bot is already running"):
        super().__init__(message)


class NotActiveError(LifecycleError):
    """stop() called while the bot is not active."""

    def __init__(self, message: str = "Bot is not running"):
        super().__init__(message)


class AnalysisInProgressError(CrossoverBotError):
    """A manual analysis was requested while a cycle is still running."""

    def __init__(self, message: str = "Analysis already in progress"):
        super().__init__(message)
