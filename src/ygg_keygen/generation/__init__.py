"""Parallel candidate generation."""

from ygg_keygen.generation.channel import Channel
from ygg_keygen.generation.collector import collect
from ygg_keygen.generation.producer import generate_scored, produce
from ygg_keygen.generation.round import RoundResult, RoundSpec, make_executor, run_round

__all__ = [
    "Channel",
    "RoundResult",
    "RoundSpec",
    "collect",
    "generate_scored",
    "make_executor",
    "produce",
    "run_round",
]
