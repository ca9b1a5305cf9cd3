"""Generation session: owns the pool and random source for one run."""

from rpcgen.session.session import GenerationSession, SessionResult

__all__ = ["GenerationSession", "SessionResult"]
