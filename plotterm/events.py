"""Synchronous event bus connecting terminal input to the plot session

Input readers create :any:`Event` instances, which queue themselves; the
main loop calls :any:`process` once per iteration, delivering every queued
event to the matching subscriptions, in order, on the calling thread.
"""
import os
import signal
import time
from collections import deque
from copy import copy

from plotterm.utils import IterableFlag, V2


#: Inner, process-wide event queue.
#: Events dispatched are placed on it, until something calls
#: events.process, which will send them to subscribers or discard them.
_event_queue = deque()

_sigwinch_counter = 0
_original_sigwinch = None


class EventTypes(IterableFlag):
    KeyPress = 1
    MouseMove = 2
    MousePress = 4
    MouseRelease = 8
    MouseWheel = 16
    TerminalSizeChange = 32
    ExpressionChange = 64
    ViewReset = 128
    QuitLoop = 256


# Make names above avaliable from plotterm.events.NAME
for event in EventTypes:
    globals()[event.name] = event
del event


class Event:
    def __init__(self, type, dispatch=True, **kwargs):
        """Event object - used to deliver input and commands to the plot session.

        Args:
          - type (EventTypes): The event type
          - dispatch (bool): whether the event should automatically queue itself
                for being consumed. Default: True
          - kwargs: any other attributes that should be set on the Event object.
                Mouse events carry "pos" and "buttons"; wheel events also carry "delta"
                (negative for scrolling up); key presses carry "key".
        """
        self.__dict__.update(kwargs)
        self.timestamp = time.time()
        self.type = type

        if dispatch:
            _event_dispatch(self)

    def copy(self, **kwargs):
        ev = copy(self)
        ev.__dict__.update(kwargs)
        return ev

    def __repr__(self):
        return f"Event <{self.type}> {self.__dict__}"


class Subscription:
    subscriptions = {}

    def __init__(self, event_types, callback=None, guard=None):
        """Registers interest in one or more event types

        Args:
          - event_types (EventTypes): a single type or several ORed together
          - callback (Optional[callable]): called with each event. If not given,
                events are accumulated in the ".queue" deque instead.
          - guard (Optional[callable]): predicate an event must satisfy to be delivered
        """
        cls = self.__class__
        self.callback = self.queue = None
        self.guard = guard
        if callback:
            self.callback = callback
        else:
            self.queue = deque()
        self.types = event_types
        for type_ in event_types:
            cls.subscriptions.setdefault(type_, []).append(self)
        self.terminated = False

    def __bool__(self):
        if self.callback:
            return True
        return bool(self.queue)

    def kill(self):
        for type in self.types:
            self.__class__.subscriptions[type].remove(self)
        self.terminated = True

    def __repr__(self):
        return f"Subscription {self.types}{', callback: ' + repr(self.callback) if self.callback else '' }"


def dispatch(event):
    """Queues any event to be dispatched later, when "process" is called.

    An Event will normally call this implicitly when instantiated. But
    if one passes it `dispatch=False` upon instantiation,
    (for example, to set extra attributes before sending it away)
    this has to be called manually.
    """
    _event_queue.append(event)


# Alias so this function can be called by another name inside Event.__init__
_event_dispatch = dispatch


def list_subscriptions(type_: EventTypes) -> list:
    """Returns a list with all active subscriptions for the given event type"""
    return list(Subscription.subscriptions.get(type_, []))


def process():
    """Sends any created events since the last call to their subscribers.

    Callbacks run synchronously and may create other events: those are
    delivered in the same call, after the current batch.
    """
    events = deque(_event_queue)
    _event_queue.clear()
    while events:
        for event in events:
            for subscription in list_subscriptions(event.type):
                if subscription.guard and not subscription.guard(event):
                    continue
                if subscription.callback:
                    subscription.callback(event)
                else:
                    subscription.queue.append(event)
        events = deque(_event_queue)
        _event_queue.clear()


def clear():
    """Discards all queued events and subscriptions"""
    _event_queue.clear()
    Subscription.subscriptions.clear()


def window_change_handler(signal_number, frame):
    """Called as a signal to terminal-window resize

    Installed by the interactive application and adds
    TerminalSizeChange events to the event system.
    """
    new_size = V2(os.get_terminal_size())
    Event(EventTypes.TerminalSizeChange, size=new_size)


def register_sigwinch():
    global _sigwinch_counter, _original_sigwinch
    if not getattr(signal, "SIGWINCH", ""):
        # Non Posix platform have no sigwinch - terminal size change have
        # to be detected by other means.
        return
    if _sigwinch_counter == 0:
        _original_sigwinch = signal.getsignal(signal.SIGWINCH)

    _sigwinch_counter += 1

    signal.signal(signal.SIGWINCH, window_change_handler)


def unregister_sigwinch():
    global _sigwinch_counter
    if not getattr(signal, "SIGWINCH", "") or not _sigwinch_counter:
        return
    _sigwinch_counter -= 1
    if _sigwinch_counter == 0 and _original_sigwinch is not None:
        signal.signal(signal.SIGWINCH, _original_sigwinch)
