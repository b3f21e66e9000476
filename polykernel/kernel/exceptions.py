class KernelError(Exception):
    """
    This root Kernel exception is provided in case we ever want to provide common functionality
    across all polykernel exceptions.

    Degenerate geometry never raises, it invalidates the polygon instead. Exceptions are
    reserved for programmer errors such as a malformed Context.
    """


class ContextError(ValueError, KernelError):
    """
    ContextError is raised when a Context is created with a malformed precision, scale or
    epsilon. This is not recoverable at runtime, the configuration itself must be fixed:

    try:
        context = Context(precision=-2)
    except ContextError as e:
        channel.error(str(e))
    """
