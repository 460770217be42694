"""Candidate metadata, its registry, and the predicter that reads it back."""

from election_predicter.candidates.model import Candidate, Party, Sex
from election_predicter.candidates.predicter import (
    ElectionMethod,
    ElectionPredicter,
    PredictionResult,
    candidates,
)
from election_predicter.candidates.registry import CandidateRegistry, RegisteredCandidate

__all__ = [
    "Candidate",
    "CandidateRegistry",
    "ElectionMethod",
    "ElectionPredicter",
    "Party",
    "PredictionResult",
    "RegisteredCandidate",
    "Sex",
    "candidates",
]
