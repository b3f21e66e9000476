import re
import weakref
from collections import deque
from datetime import datetime
from typing import Callable, Optional

# https://en.wikipedia.org/wiki/ANSI_escape_code#3-bit_and_4-bit
BBCODE_LIST = {
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "white": "\033[37m",
    "bold": "\033[1m",
    "/bold": "\033[22m",
    "normal": "\033[0m",
}

# re for bbcode->ansi
all_tags = list(BBCODE_LIST.keys())
color_tags = [
    k for k in BBCODE_LIST if not k.startswith("/") and k not in ("normal", "bold")
]
all_tags.extend(f"/{k}" for k in color_tags)

RE_ANSI = re.compile(
    r"((?:\[raw\])(.*?)(?:\[/raw\]|$)|"
    + r"|".join([r"\[%s\]" % x for x in all_tags])
    + r")",
    re.IGNORECASE,
)

LEVEL_LOG = "log"
LEVEL_WARN = "warn"
LEVEL_ERROR = "error"

# Severity only changes how a message is presented, never what it means.
LEVEL_COLORS = {
    LEVEL_LOG: None,
    LEVEL_WARN: "yellow",
    LEVEL_ERROR: "red",
}

DEFAULT_BUFFER_SIZE = 6


class SimpleLogger:
    def __init__(self, name: str):
        self.name = name

    def log(self, message: str):
        print(f"[{self.name}-Info] {message}")

    def warning(self, message: str):
        print(f"[{self.name}-Warning] {message}")

    def error(self, message: str):
        print(f"[{self.name}-Error] {message}")


def bbcode_to_ansi(text):
    return "".join(
        [
            BBCODE_LIST["normal"],
            RE_ANSI.sub(bbcode_to_ansi_match, text),
            BBCODE_LIST["normal"],
        ]
    )


def bbcode_to_ansi_match(m):
    tag = re.sub(r"\].*", "", m[0])[1:].lower()
    if tag == "raw":
        return m[2]
    return BBCODE_LIST.get(tag, BBCODE_LIST["normal"])


def bbcode_to_plain(text):
    def strip(m):
        tag = re.sub(r"\].*", "", m[0])[1:].lower()
        return m[2] if tag == "raw" else ""

    return RE_ANSI.sub(strip, text)


# Logger for channel system
logger = SimpleLogger(__name__)


class Channel:
    """
    Append-only message sink for geometry status, warnings and errors.

    A channel is called with a message and an optional severity. The message is formatted,
    delivered to every watcher and kept in a capped buffer where the oldest entries are
    evicted first. Nothing in the geometry kernel depends on what happens to the message.

    Usage:
        channel = Channel("offset", buffer_size=6, timestamp=True)
        channel.watch(print)
        channel("Offset complete")
        channel.warn("Offset rejected")
        channel.entries()  # [("log", "Offset complete"), ("warn", "Offset rejected")]
    """

    def __init__(
        self,
        name: str,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        timestamp: bool = False,
        ansi: bool = False,
    ):
        self.watchers = []
        self.name = name
        self.buffer_size = buffer_size
        self.timestamp = timestamp
        self.ansi = ansi
        self.buffer = None if buffer_size == 0 else deque(maxlen=buffer_size)
        self._call_depth = 0  # Recursion guard

    def __repr__(self):
        return f"Channel({repr(self.name)}, buffer_size={str(self.buffer_size)})"

    def __call__(self, message: str, level: str = LEVEL_LOG):
        if level not in LEVEL_COLORS:
            raise ValueError(f"Unknown message level: {level}")
        if self._call_depth > 10:
            logger.warning(
                f"Channel '{self.name}' recursion limit exceeded, dropping message"
            )
            return
        self._call_depth += 1
        try:
            if self.buffer is not None:
                self.buffer.append((level, message))
            if not self.watchers:
                return
            text = self.format(message, level)
            for w in self.watchers[:]:  # Copy list to avoid modification during iteration
                self._call_watcher(w, text)
        finally:
            self._call_depth -= 1

    def __len__(self):
        return 0 if self.buffer is None else len(self.buffer)

    def __iadd__(self, other):
        self.watch(other)
        return self

    def __isub__(self, other):
        self.unwatch(other)
        return self

    def __bool__(self):
        """
        The truthy value of the channel reflects whether a message would actually be kept or
        sent anywhere. Callers can skip building expensive messages when this is False.
        """
        return bool(self.watchers) or self.buffer_size != 0

    def log(self, message: str):
        self(message, LEVEL_LOG)

    def warn(self, message: str):
        self(message, LEVEL_WARN)

    def error(self, message: str):
        self(message, LEVEL_ERROR)

    def format(self, message: str, level: str = LEVEL_LOG) -> str:
        color = LEVEL_COLORS[level]
        if color is not None:
            message = f"[{color}]{message}[/{color}]"
        if self.timestamp:
            ts = datetime.now().strftime("[%H:%M:%S] ")
            message = ts + message.replace("\n", f"\n{ts}")
        if self.ansi:
            return bbcode_to_ansi(message)
        return bbcode_to_plain(message)

    def entries(self) -> list:
        """Buffered (level, message) pairs, oldest first."""
        if self.buffer is None:
            return []
        return list(self.buffer)

    def clear(self):
        if self.buffer is not None:
            self.buffer.clear()

    def watch(self, monitor_function: Callable, weak: bool = False):
        """
        Add a watcher function to this channel. Already buffered messages are replayed to it.

        Args:
            monitor_function: The function to call when messages are sent
            weak: If True, use a weak reference to prevent memory leaks
        """
        for q in self.watchers:
            if q is monitor_function:
                return  # This is already being watched by that.
            if isinstance(q, weakref.ref) and q() is monitor_function:
                return

        if weak:
            try:
                ref = weakref.ref(monitor_function, self._watcher_died)
                self.watchers.append(ref)
            except TypeError:
                # Built-ins and some callables don't support weak references
                logger.warning(
                    f"Callable {monitor_function} does not support weak references, using strong reference"
                )
                self.watchers.append(monitor_function)
        else:
            self.watchers.append(monitor_function)

        if self.buffer is not None:
            for level, line in list(self.buffer):
                monitor_function(self.format(line, level))

    def _call_watcher(self, watcher, message: str):
        try:
            if isinstance(watcher, weakref.ref):
                watcher_func = watcher()
                if watcher_func is None:
                    self._watcher_died(watcher)
                    return
            else:
                watcher_func = watcher
            watcher_func(message)
        except Exception as e:
            # One broken watcher must not stop the others.
            logger.warning(
                f"Watcher error in channel '{self.name}': {type(e).__name__}: {e}"
            )

    def _watcher_died(self, ref):
        try:
            self.watchers.remove(ref)
        except ValueError:
            pass  # Already removed

    def unwatch(self, monitor_function: Callable):
        """Remove a watcher function from this channel."""
        removed = False
        for w in self.watchers[:]:
            if w is monitor_function or (
                isinstance(w, weakref.ref) and w() is monitor_function
            ):
                self.watchers.remove(w)
                removed = True
        if not removed:
            logger.warning(
                f"Watcher {monitor_function} not found in channel '{self.name}'"
            )

    def resize_buffer(self, new_size: int):
        """
        Dynamically resize the message buffer.

        Args:
            new_size: New buffer size. 0 disables buffering.
        """
        if new_size == 0:
            if self.buffer is not None:
                self.buffer.clear()
            self.buffer = None
        elif self.buffer is None:
            self.buffer = deque(maxlen=new_size)
        else:
            self.buffer = deque(self.buffer, maxlen=new_size)
        self.buffer_size = new_size


class NullChannel:
    """
    Default channel for geometry that nobody listens to. Every message is dropped.
    """

    name = "null"

    def __repr__(self):
        return "NullChannel()"

    def __call__(self, message: str, level: str = LEVEL_LOG):
        pass

    def __bool__(self):
        return False

    def __len__(self):
        return 0

    def log(self, message: str):
        pass

    def warn(self, message: str):
        pass

    def error(self, message: str):
        pass

    def entries(self) -> list:
        return []


NULL_CHANNEL = NullChannel()


def channel_or_null(channel: Optional[Channel]):
    return NULL_CHANNEL if channel is None else channel
