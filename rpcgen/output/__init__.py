"""Chunked output of serialized requests."""

from rpcgen.output.writer import chunk_path, write_chunks

__all__ = ["chunk_path", "write_chunks"]
