"""Sentence spout demo."""

from stormspout.apps.words.spouts import SentenceSpout

__all__ = ["SentenceSpout"]
