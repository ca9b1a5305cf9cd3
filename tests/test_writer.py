"""Tests for chunked output writing."""

import json
from pathlib import Path
from typing import List

import pytest

from rpcgen.models import Transaction
from rpcgen.output.writer import chunk_path, write_chunks
from rpcgen.rpc.envelope import RpcRequest, build_requests


@pytest.fixture
def requests() -> List[RpcRequest]:
    """Provide ten requests."""
    transactions = [
        Transaction(sender="a", receiver="b", amount=i) for i in range(10)
    ]
    return build_requests(transactions, {"a": "pa"})


def read_ids(path: Path) -> List[int]:
    """Return the request ids stored in a chunk file."""
    return [item["id"] for item in json.loads(path.read_text())]


class TestWriteChunks:
    """Tests for write_chunks."""

    def test_single_chunk_by_default(self, tmp_path: Path, requests: List[RpcRequest]) -> None:
        """Without a chunk size everything goes to <output>.0."""
        paths = write_chunks(requests, tmp_path / "rpc.json")

        assert paths == [tmp_path / "rpc.json.0"]
        assert read_ids(paths[0]) == list(range(10))

    def test_chunking(self, tmp_path: Path, requests: List[RpcRequest]) -> None:
        """Requests are split into consecutive chunks; ids continue across files."""
        paths = write_chunks(requests, tmp_path / "rpc.json", chunk_size=4)

        assert [p.name for p in paths] == ["rpc.json.0", "rpc.json.1", "rpc.json.2"]
        assert read_ids(paths[0]) == [0, 1, 2, 3]
        assert read_ids(paths[1]) == [4, 5, 6, 7]
        assert read_ids(paths[2]) == [8, 9]

    def test_empty_run_writes_empty_array(self, tmp_path: Path) -> None:
        """An empty run still leaves one file holding []."""
        paths = write_chunks([], tmp_path / "rpc.json", chunk_size=3)

        assert paths == [tmp_path / "rpc.json.0"]
        assert paths[0].read_text() == "[]"

    def test_creates_parent_directory(self, tmp_path: Path, requests: List[RpcRequest]) -> None:
        """Missing output directories are created."""
        paths = write_chunks(requests, tmp_path / "out" / "rpc.json")

        assert paths[0].exists()

    def test_invalid_chunk_size(self, tmp_path: Path, requests: List[RpcRequest]) -> None:
        """Chunk sizes below one are rejected."""
        with pytest.raises(ValueError):
            write_chunks(requests, tmp_path / "rpc.json", chunk_size=0)


def test_chunk_path_appends_index() -> None:
    """Chunk files keep the full base name and add the index."""
    assert chunk_path("out/rpc.json", 3) == Path("out/rpc.json.3")
