"""Core framework components for SKYFLAP."""

from .events import EventBus, Event, EventType

__all__ = ["EventBus", "Event", "EventType"]
