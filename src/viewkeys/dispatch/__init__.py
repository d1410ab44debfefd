"""Caller-side key reading loop: buffering, timeouts and keystring replay."""

from .processor import InputResult, KeySequenceProcessor, split_keys

__all__ = ["InputResult", "KeySequenceProcessor", "split_keys"]
